from datetime import datetime, timedelta, timezone

from ..openshift import ApiError, OpenShift
from ..utils import LOG, ACTIONS, ERRORS


def restart_old_pods(api:OpenShift, namespace:str, threshold_days:int,
                     now:datetime|None=None, dry_run:bool=False) -> list[dict]:
    """Delete every pod in `namespace` that started more than `threshold_days` ago.

    Deleting is the restart: the owning deployment recreates the pod. Pods that
    have not started yet or are already terminating are left alone.
    """
    if threshold_days < 0: raise ValueError("threshold must not be negative")
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None: raise ValueError("now must be timezone aware")
    limit = timedelta(days=threshold_days)

    pods = api.pods(namespace).items
    if not pods:
        LOG.info("There are no pods on %s namespace.", namespace)
        return []

    results = []
    for pod in pods:
        age = pod.age(now)
        if age is None or pod.terminating:
            LOG.debug("Skipping pod %s (not started or terminating)", pod.name)
            continue
        if age <= limit:
            continue

        if dry_run:
            LOG.warning("[dry-run] Would restart pod %s (age %s)", pod.name, age)
            results.append({"pod": pod.name, "status": "dry-run", "age_hours": age.total_seconds() / 3600})
            continue
        try:
            api.delete_pod(namespace, pod.name)
        except ApiError as e:
            LOG.error("Failed to restart pod %s: %s", pod.name, e)
            ERRORS.labels("restart_pod").inc()
            results.append({"pod": pod.name, "status": "failed", "error": str(e)})
            continue
        LOG.info("Restarting pod %s", pod.name)
        ACTIONS.labels("restart_pod", namespace).inc()
        results.append({"pod": pod.name, "status": "deleted_pod", "age_hours": age.total_seconds() / 3600})

    restarted = sum(1 for r in results if r["status"] == "deleted_pod")
    failed = sum(1 for r in results if r["status"] == "failed")
    planned = sum(1 for r in results if r["status"] == "dry-run")
    if not results:
        LOG.info("None of the pods on %s namespace are older than %d days", namespace, threshold_days)
    elif restarted and not failed:
        LOG.info("Successfully restarted %d pods on %s namespace", restarted, namespace)
    elif planned:
        LOG.warning("[dry-run] %d pods on %s namespace are older than %d days", planned, namespace, threshold_days)
    else:
        LOG.warning("Restarted %d of %d pods on %s namespace, %d failed",
                    restarted, restarted + failed, namespace, failed)
    return results
