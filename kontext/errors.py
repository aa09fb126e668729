from pathlib import Path
from typing import Optional


class KontextError(Exception):
    """Base class for every failure kontext reports to the user"""


class LoadError(KontextError):
    """Kubeconfig is missing, unreadable or malformed"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"error loading kubeconfig {path}: {reason}")


class SaveError(KontextError):
    """Kubeconfig could not be written"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"error saving kubeconfig {path}: {reason}")


class ContextNotFoundError(KontextError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"context '{name}' does not exist")


class NoCurrentContextError(KontextError):
    """No current context is set, or it points at a context that is gone"""

    def __init__(self, dangling: Optional[str] = None):
        self.dangling = dangling
        if dangling:
            message = f"current context '{dangling}' does not exist in config"
        else:
            message = "no current context set"
        super().__init__(message)


class SelectionCancelled(KontextError):
    """User aborted an interactive choice"""

    def __init__(self, message: str = "selection canceled"):
        super().__init__(message)
