from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_NAMESPACE = "default"

# Offered when the cluster cannot be reached
FALLBACK_NAMESPACES = ("default", "kube-system", "kube-public", "kube-node-lease")


@dataclass
class Context:
    """Context entry: which cluster, which credentials, which namespace"""
    cluster: str = ""
    auth_info: str = ""
    namespace: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)  # unknown keys, kept verbatim

    @property
    def effective_namespace(self) -> str:
        """Namespace kubectl would use, "default" when unset"""
        return self.namespace or DEFAULT_NAMESPACE

    def to_dict(self) -> dict:
        """Convert context payload to a kubeconfig mapping"""
        data = {
            'cluster': self.cluster,
            'user': self.auth_info,
        }
        if self.namespace:
            data['namespace'] = self.namespace
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        """Create context from a kubeconfig mapping (missing keys become empty)"""
        data = dict(data or {})
        return cls(
            cluster=data.pop('cluster', None) or "",
            auth_info=data.pop('user', None) or "",
            namespace=data.pop('namespace', None) or "",
            extra=data,
        )


@dataclass
class Cluster:
    """Opaque cluster connection data"""
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AuthInfo:
    """Opaque credential data (a kubeconfig "user")"""
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class KubeConfig:
    """The whole kubeconfig document"""
    current_context: str = ""
    contexts: Dict[str, Context] = field(default_factory=dict)
    clusters: Dict[str, Cluster] = field(default_factory=dict)
    auth_infos: Dict[str, AuthInfo] = field(default_factory=dict)
    api_version: str = "v1"
    kind: str = "Config"
    preferences: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert the document to the kubeconfig layout, named lists sorted by name"""
        data = {
            'apiVersion': self.api_version,
            'kind': self.kind,
            'preferences': self.preferences,
            'clusters': [
                {'name': name, 'cluster': self.clusters[name].data}
                for name in sorted(self.clusters)
            ],
            'users': [
                {'name': name, 'user': self.auth_infos[name].data}
                for name in sorted(self.auth_infos)
            ],
            'contexts': [
                {'name': name, 'context': self.contexts[name].to_dict()}
                for name in sorted(self.contexts)
            ],
            'current-context': self.current_context,
        }
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        """Create the document from a parsed kubeconfig mapping.

        Raises ValueError when a named list is not a list of mappings with a
        ``name`` key.
        """
        data = dict(data or {})
        doc = cls(
            current_context=data.pop('current-context', None) or "",
            api_version=data.pop('apiVersion', None) or "v1",
            kind=data.pop('kind', None) or "Config",
            preferences=data.pop('preferences', None) or {},
        )
        for name, payload in _named_entries(data.pop('clusters', None), 'clusters', 'cluster'):
            doc.clusters[name] = Cluster(payload or {})
        for name, payload in _named_entries(data.pop('users', None), 'users', 'user'):
            doc.auth_infos[name] = AuthInfo(payload or {})
        for name, payload in _named_entries(data.pop('contexts', None), 'contexts', 'context'):
            doc.contexts[name] = Context.from_dict(payload)
        doc.extra = data
        return doc

    def is_cluster_referenced(self, name: str) -> bool:
        """Check whether any context still points at this cluster"""
        if not name:
            return False
        return any(ctx.cluster == name for ctx in self.contexts.values())

    def is_auth_info_referenced(self, name: str) -> bool:
        """Check whether any context still points at this auth info"""
        if not name:
            return False
        return any(ctx.auth_info == name for ctx in self.contexts.values())


def _named_entries(entries, section: str, payload_key: str):
    if entries is None:
        return
    if not isinstance(entries, list):
        raise ValueError(f"'{section}' must be a list, got {type(entries).__name__}")
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get('name'):
            raise ValueError(f"'{section}' entry {i} has no name")
        payload = entry.get(payload_key)
        if payload is not None and not isinstance(payload, dict):
            raise ValueError(f"'{section}' entry '{entry['name']}' has a malformed '{payload_key}'")
        yield str(entry['name']), payload


@dataclass
class NamespaceListing:
    """Namespaces offered for a context, and whether they came from the cluster"""
    names: List[str]
    live: bool = True

    @property
    def is_fallback(self) -> bool:
        return not self.live

    @classmethod
    def fallback(cls):
        return cls(names=list(FALLBACK_NAMESPACES), live=False)


@dataclass
class DeletionResult:
    """What a context deletion removed"""
    context: str
    pruned_cluster: Optional[str] = None
    pruned_auth_info: Optional[str] = None
    cleared_current: bool = False
