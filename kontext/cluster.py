import logging
from pathlib import Path
from typing import List, Optional

from kubernetes import client, config

logger = logging.getLogger(__name__)


class ClusterNamespaceLister:
    """Lists namespaces straight from the cluster behind a kubeconfig context"""

    def __init__(self, request_timeout: Optional[float] = None):
        self.request_timeout = request_timeout

    def list_namespaces(self, kubeconfig_path: Path, context_name: str) -> List[str]:
        """Connect with the given context and return the namespace names.

        The client is built from the file itself so relative certificate and
        key paths resolve against the kubeconfig's directory. Every failure
        (bad credentials, unreachable server, API error) propagates to the
        caller.
        """
        api_client = config.new_client_from_config(config_file=str(kubeconfig_path), context=context_name)
        try:
            core = client.CoreV1Api(api_client)
            kwargs = {}
            if self.request_timeout is not None:
                kwargs['_request_timeout'] = self.request_timeout
            logger.debug("listing namespaces for context %s", context_name)
            namespaces = core.list_namespace(**kwargs)
            return [ns.metadata.name for ns in namespaces.items]
        finally:
            api_client.close()
