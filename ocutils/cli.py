import argparse

from . import __version__
from .actions import restart as restart_act, scale as scale_act
from .auth import whoami_token
from .config import ConfigError, load_config, resolve_server
from .openshift import OpenShift, OpenShiftError
from .utils import LOG, dump_metrics


def _threshold(v:str) -> int:
    n = int(v)
    if n < 0: raise argparse.ArgumentTypeError("threshold must be 0 or more days")
    return n

def _step(v:str) -> int:
    n = int(v)
    if n < 1: raise argparse.ArgumentTypeError("step must be at least 1")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="oc-utils",
        description="A command-line utility to provide extra functionality for OpenShift management.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--prod", action="store_true", help="Use production Openshift (default is non-prod).")
    p.add_argument("--server", help="API server URL, overrides --prod and the config file.")
    p.add_argument("--config", help="YAML config file (default: $OC_UTILS_CONFIG or the bundled one).")
    p.add_argument("--dry-run", action="store_true", help="Only log what would change.")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    for name, direction in (("scaleup", "up"), ("scaledown", "down")):
        sp = sub.add_parser(name, help=f"Scale {direction} all the pods in a given namespace.")
        sp.add_argument("namespace", help="Openshift namespace to execute command in.")
        sp.add_argument("-d", "--deployment", action="append", dest="deployments", metavar="NAME",
                        help="Only scale this deploymentconfig (repeatable).")
        sp.add_argument("--step", type=_step, help="Replicas to add/remove per deployment (default from config).")
        sp.set_defaults(direction=direction)

    rp = sub.add_parser("restartpods", help="Restart all the pods in a namespace that are older than given threshold.")
    rp.add_argument("namespace", help="Openshift namespace to execute command in.")
    rp.add_argument("threshold", type=_threshold, help="Age in days above which a pod is restarted.")
    return p


def run(args, cfg) -> list[dict]:
    base = resolve_server(cfg, args.prod, args.server)
    token = whoami_token(cfg.oc_binary, base)
    api = OpenShift(base, token, dc_api=cfg.api.deploymentconfigs, core_api=cfg.api.core,
                    verify=cfg.verify_ssl, timeout=cfg.timeout_seconds)
    dry_run = args.dry_run or cfg.dry_run
    LOG.debug("using %s (dry_run=%s)", base, dry_run)

    if args.command == "restartpods":
        return restart_act.restart_old_pods(api, args.namespace, args.threshold, dry_run=dry_run)
    return scale_act.scale_namespace(api, args.namespace, args.direction, step=args.step or cfg.scale_step,
                                     only=args.deployments, dry_run=dry_run)


def main(argv:list[str]|None=None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level: LOG.setLevel(args.log_level)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        LOG.error("%s", e)
        return 1

    try:
        results = run(args, cfg)
    except (OpenShiftError, ConfigError) as e:
        LOG.error("%s", e)
        return 1
    finally:
        dump_metrics(cfg.metrics.textfile)

    failed = [r for r in results if r["status"] == "failed"]
    if failed:
        LOG.error("%d of %d operations failed", len(failed), len(results))
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
