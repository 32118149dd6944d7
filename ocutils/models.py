from datetime import datetime, timedelta, timezone
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any


class _Obj(BaseModel):
    # keep whatever the server sends so objects can be written back untouched
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ObjectMeta(_Obj):
    name: str = ""
    namespace: Optional[str] = None
    resource_version: Optional[str] = Field(None, alias="resourceVersion")
    creation_timestamp: Optional[datetime] = Field(None, alias="creationTimestamp")
    deletion_timestamp: Optional[datetime] = Field(None, alias="deletionTimestamp")
    labels: Dict[str, str] = {}
    annotations: Dict[str, str] = {}


class ListMeta(_Obj):
    resource_version: Optional[str] = Field(None, alias="resourceVersion")
    self_link: Optional[str] = Field(None, alias="selfLink")


class ScaleSpec(_Obj):
    replicas: int = 0


class Scale(_Obj):
    kind: str = "Scale"
    api_version: Optional[str] = Field(None, alias="apiVersion")
    metadata: ObjectMeta = ObjectMeta()
    spec: ScaleSpec = ScaleSpec()
    status: Optional[Dict[str, Any]] = None

    @property
    def replicas(self) -> int:
        return self.spec.replicas

    def with_replicas(self, n:int) -> "Scale":
        # assigning marks spec as set, so payload() always carries it
        self.spec = ScaleSpec(**{**self.spec.model_dump(by_alias=True, exclude_unset=True), "replicas": n})
        return self

    def payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class DeploymentConfigSpec(_Obj):
    replicas: int = 0
    selector: Dict[str, str] = {}


class DeploymentConfig(_Obj):
    metadata: ObjectMeta = ObjectMeta()
    spec: DeploymentConfigSpec = DeploymentConfigSpec()
    status: Dict[str, Any] = {}


class DeploymentConfigList(_Obj):
    kind: str = "DeploymentConfigList"
    metadata: ListMeta = ListMeta()
    items: list[DeploymentConfig] = []

    def names(self) -> list[str]:
        return [d.metadata.name for d in self.items]


class PodStatus(_Obj):
    phase: Optional[str] = None
    start_time: Optional[datetime] = Field(None, alias="startTime")


class Pod(_Obj):
    metadata: ObjectMeta = ObjectMeta()
    status: PodStatus = PodStatus()

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def terminating(self) -> bool:
        return self.metadata.deletion_timestamp is not None

    def age(self, now:datetime|None=None) -> timedelta|None:
        """Time since the pod started, None while it is still pending."""
        if self.status.start_time is None: return None
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None: raise ValueError("now must be timezone aware")
        return now - self.status.start_time


class PodList(_Obj):
    kind: str = "PodList"
    metadata: ListMeta = ListMeta()
    items: list[Pod] = []


class ApiPaths(BaseModel):
    deploymentconfigs: str = "/oapi/v1"
    core: str = "/api/v1"


class MetricsCfg(BaseModel):
    textfile: Optional[str] = None


class RootCfg(BaseModel):
    clusters: Dict[str, str]
    api: ApiPaths = ApiPaths()
    verify_ssl: bool = True
    timeout_seconds: int = 30
    oc_binary: str = "oc"
    scale_step: int = Field(1, ge=1)
    dry_run: bool = False
    metrics: MetricsCfg = MetricsCfg()
