import requests
from pydantic import ValidationError

from .models import DeploymentConfigList, PodList, Scale
from .utils import LOG, REQUESTS


class OpenShiftError(RuntimeError):
    pass


class NotLoggedIn(OpenShiftError):
    def __init__(self, server:str|None=None, reason:str="You need to login to OpenShift before running this!"):
        self.server = server
        hint = f"Use command 'oc login {server}' for example" if server else "Use command 'oc login <server>' first"
        super().__init__(f"{reason} {hint}")


class ClusterUnreachable(OpenShiftError):
    pass


class ApiError(OpenShiftError):
    def __init__(self, method:str, url:str, status_code:int, text:str=""):
        self.method, self.url, self.status_code, self.text = method, url, status_code, text
        super().__init__(f"{method} {url} -> {status_code} {text[:200]}".rstrip())


class OpenShift:
    def __init__(self, base:str, token:str, dc_api:str="/oapi/v1", core_api:str="/api/v1",
                 verify:bool=True, timeout:int=30, session:requests.Session|None=None):
        self.base = base.rstrip('/')
        self.dc_api, self.core_api = dc_api, core_api
        self.verify, self.timeout = verify, timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {token}",
                                     "Accept": "application/json"})

    def url(self, api:str, namespace:str, resource:str, name:str|None=None, sub:str|None=None) -> str:
        parts = [f"{self.base}{api}", "namespaces", namespace, resource]
        if name:
            parts.append(name)
            if sub: parts.append(sub)
        return "/".join(parts)

    def _call(self, method:str, url:str, **kw) -> requests.Response:
        LOG.debug("%s %s", method, url)
        try:
            r = self.session.request(method, url, timeout=self.timeout, verify=self.verify, **kw)
        except requests.exceptions.ConnectionError as e:
            raise ClusterUnreachable(f"Couldn't reach {self.base} - you're probably not on the VPN? ({e})") from e
        except requests.exceptions.Timeout as e:
            raise ClusterUnreachable(f"{method} {url} timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            # InvalidSchema, MissingSchema, InvalidURL: usually a server URL without https://
            raise ClusterUnreachable(f"{method} {url} failed: {e}") from e
        REQUESTS.labels(method, str(r.status_code)).inc()
        if r.status_code == 401: raise NotLoggedIn(self.base)
        if not r.ok: raise ApiError(method, url, r.status_code, r.text)
        return r

    def _decode(self, model, method:str, url:str, **kw):
        r = self._call(method, url, **kw)
        try:
            return model.model_validate(r.json())
        except (ValueError, ValidationError) as e:
            # e.g. an HTML login page served by a proxy in front of the API
            raise ApiError(method, url, r.status_code, f"unexpected response body: {e}") from e

    def deployment_configs(self, namespace:str) -> DeploymentConfigList:
        return self._decode(DeploymentConfigList, "GET", self.url(self.dc_api, namespace, "deploymentconfigs"))

    def get_scale(self, namespace:str, name:str) -> Scale:
        return self._decode(Scale, "GET", self.url(self.dc_api, namespace, "deploymentconfigs", name, "scale"))

    def put_scale(self, namespace:str, name:str, scale:Scale) -> Scale:
        return self._decode(Scale, "PUT", self.url(self.dc_api, namespace, "deploymentconfigs", name, "scale"),
                            json=scale.payload())

    def pods(self, namespace:str) -> PodList:
        return self._decode(PodList, "GET", self.url(self.core_api, namespace, "pods"))

    def delete_pod(self, namespace:str, name:str) -> None:
        self._call("DELETE", self.url(self.core_api, namespace, "pods", name))
