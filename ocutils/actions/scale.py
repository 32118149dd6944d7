from ..openshift import ApiError, OpenShift
from ..utils import LOG, ACTIONS, ERRORS

DIRECTIONS = {"up": "scale_up", "down": "scale_down"}


def target_replicas(cur:int, direction:str, step:int=1) -> int|None:
    """New replica count, or None when there is nothing to do."""
    if direction == "up":
        return cur + step
    if cur <= 0:
        return None  # can't scale below zero
    return max(cur - step, 0)

def scale_namespace(api:OpenShift, namespace:str, direction:str, step:int=1,
                    only:list[str]|None=None, dry_run:bool=False) -> list[dict]:
    if direction not in DIRECTIONS: raise ValueError(f"unknown direction {direction!r}")
    if step < 1: raise ValueError("step must be at least 1")
    action = DIRECTIONS[direction]

    names = api.deployment_configs(namespace).names()
    if not names:
        LOG.info("There are no deployments on %s namespace, it is either empty or doesn't exist.", namespace)
        return []

    if only:
        for missing in sorted(set(only) - set(names)):
            LOG.warning("Deployment %s not found on %s namespace", missing, namespace)
        names = [n for n in names if n in only]

    LOG.info("Scaling pods on %s namespace", namespace)
    results = []
    for name in names:
        cur = new = None
        try:
            scale = api.get_scale(namespace, name)
            cur = scale.replicas
            new = target_replicas(cur, direction, step)
            if new is None:
                LOG.info("Deployment %s already has zero replicas, skipping", name)
                results.append({"deployment": name, "status": "skipped", "from": cur, "to": cur})
                continue

            LOG.info("Scaling deployment %s from %d -> %d", name, cur, new)
            if dry_run:
                LOG.warning("[dry-run] Would scale %s to %d", name, new)
                results.append({"deployment": name, "status": "dry-run", "from": cur, "to": new})
                continue

            api.put_scale(namespace, name, scale.with_replicas(new))
            ACTIONS.labels(action, namespace).inc()
            results.append({"deployment": name, "status": "scaled" if direction == "up" else "scaled_down",
                            "from": cur, "to": new})
        except ApiError as e:
            LOG.error("Failed to scale deployment %s: %s", name, e)
            ERRORS.labels(action).inc()
            results.append({"deployment": name, "status": "failed", "from": cur, "to": new, "error": str(e)})

    if not any(r["status"] == "failed" for r in results):
        LOG.info("Successfully scaled pods.")
    return results
