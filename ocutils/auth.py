import subprocess

from .openshift import NotLoggedIn


def _oc(binary:str, args:list[str]):
    cp = subprocess.run([binary] + args, capture_output=True, text=True, check=False)
    return cp.returncode, cp.stdout, cp.stderr

def whoami_token(binary:str="oc", server:str|None=None) -> str:
    """Bearer token of the user currently logged in with the cluster client."""
    try:
        code,out,err = _oc(binary, ["whoami", "-t"])
    except FileNotFoundError as e:
        raise NotLoggedIn(server, f"'{binary}' not found on PATH, install the OpenShift client and login.") from e
    token = out.strip()
    if code != 0 or not token:
        raise NotLoggedIn(server)
    return token
