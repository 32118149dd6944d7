import logging, os, sys
from prometheus_client import CollectorRegistry, Counter, write_to_textfile

LOG = logging.getLogger("ocutils")
logging.basicConfig(stream=sys.stdout, level=os.getenv("LOG_LEVEL","INFO"),
                    format="%(asctime)s %(levelname)s %(message)s")

REGISTRY = CollectorRegistry()
REQUESTS = Counter('ocutils_http_requests_total','api calls issued', ['method','code'], registry=REGISTRY)
ACTIONS = Counter('ocutils_actions_total','mutations applied', ['action','namespace'], registry=REGISTRY)
ERRORS = Counter('ocutils_errors_total','mutations failed', ['action'], registry=REGISTRY)


def dump_metrics(path:str|None):
    # textfile collector format, picked up by node_exporter
    if not path: return
    try:
        write_to_textfile(path, REGISTRY)
    except OSError as e:
        LOG.error("couldn't write metrics to %s: %s", path, e)
        return
    LOG.debug("metrics written to %s", path)
