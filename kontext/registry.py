"""Context and namespace operations on a kubeconfig file.

Every operation loads the document fresh from storage, changes it in memory
and writes it back in full. Validation failures raise before anything is
written, so the file is either fully updated or left as it was.
"""
import logging
from typing import Dict, Optional

from kontext.cluster import ClusterNamespaceLister
from kontext.errors import ContextNotFoundError, NoCurrentContextError
from kontext.models import Context, DeletionResult, KubeConfig, NamespaceListing
from kontext.storage.kubeconfig_storage import KubeConfigStorage

logger = logging.getLogger(__name__)


class ContextRegistry:
    """Operations a user performs on kubeconfig contexts"""

    def __init__(self, storage: KubeConfigStorage, namespace_lister: Optional[ClusterNamespaceLister] = None):
        self.storage = storage
        self.namespace_lister = namespace_lister or ClusterNamespaceLister()

    def _get_context(self, config: KubeConfig, name: str) -> Context:
        context = config.contexts.get(name)
        if context is None:
            raise ContextNotFoundError(name)
        return context

    def _resolve_name(self, config: KubeConfig, name: str) -> str:
        """Empty name means the current context"""
        if name:
            return name
        if not config.current_context:
            raise NoCurrentContextError()
        return config.current_context

    def list_contexts(self) -> Dict[str, Context]:
        return self.storage.load().contexts

    def current_context_name(self) -> str:
        return self.storage.load().current_context

    def switch_context(self, name: str):
        """Make name the current context"""
        config = self.storage.load()
        self._get_context(config, name)
        config.current_context = name
        self.storage.save(config)
        logger.debug("switched current context to %s", name)

    def delete_context(self, name: str) -> DeletionResult:
        """Delete a context, unset it if current, and drop clusters/users nothing uses anymore.

        References are counted by scanning the remaining contexts rather
        than by keeping a counter, since contexts can be edited directly.
        """
        config = self.storage.load()
        context = self._get_context(config, name)
        cluster_name = context.cluster
        auth_info_name = context.auth_info

        del config.contexts[name]
        result = DeletionResult(context=name)

        if config.current_context == name:
            config.current_context = ""
            result.cleared_current = True

        if cluster_name and not config.is_cluster_referenced(cluster_name):
            if config.clusters.pop(cluster_name, None) is not None:
                result.pruned_cluster = cluster_name
        if auth_info_name and not config.is_auth_info_referenced(auth_info_name):
            if config.auth_infos.pop(auth_info_name, None) is not None:
                result.pruned_auth_info = auth_info_name

        self.storage.save(config)
        logger.debug("deleted context %s (pruned cluster=%s, user=%s)",
                     name, result.pruned_cluster, result.pruned_auth_info)
        return result

    def current_namespace(self) -> str:
        """Namespace of the current context, "default" when unset"""
        config = self.storage.load()
        if not config.current_context:
            raise NoCurrentContextError()
        context = config.contexts.get(config.current_context)
        if context is None:
            raise NoCurrentContextError(dangling=config.current_context)
        return context.effective_namespace

    def namespace_for_context(self, name: str) -> str:
        config = self.storage.load()
        return self._get_context(config, name).effective_namespace

    def set_namespace(self, namespace: str):
        """Set the namespace of the current context"""
        self.set_namespace_for_context("", namespace)

    def set_namespace_for_context(self, name: str, namespace: str):
        """Set the namespace of a context (the current one when name is empty).

        An empty namespace is stored as-is and reads back as "default".
        """
        config = self.storage.load()
        name = self._resolve_name(config, name)
        self._get_context(config, name).namespace = namespace
        self.storage.save(config)
        logger.debug("set namespace of context %s to %r", name, namespace)

    def available_namespaces(self, context_name: str = "") -> NamespaceListing:
        """Namespaces from the live cluster, or the fallback set when it cannot be reached"""
        config = self.storage.load()
        context_name = self._resolve_name(config, context_name)
        self._get_context(config, context_name)

        try:
            names = self.namespace_lister.list_namespaces(self.storage.path, context_name)
        except Exception as exc:
            # offline or unreachable cluster is not an error for the caller
            logger.debug("could not list namespaces for %s, using fallback: %s", context_name, exc)
            return NamespaceListing.fallback()
        return NamespaceListing(names=list(names), live=True)
