import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Mapping, Optional

import yaml

from kontext.errors import LoadError, SaveError
from kontext.models import KubeConfig

logger = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"


def resolve_kubeconfig_path(environ: Optional[Mapping[str, str]] = None,
                            home: Optional[Path] = None) -> Path:
    """Return $KUBECONFIG when set and non-empty, else ~/.kube/config"""
    environ = os.environ if environ is None else environ
    override = environ.get(KUBECONFIG_ENV)
    if override:
        return Path(override)
    return (home or Path.home()) / ".kube" / "config"


class KubeConfigStorage:
    """YAML-based storage for a single kubeconfig file"""

    def __init__(self, path: Path = None):
        """Initialize storage with the resolved default or a custom path"""
        self.path = Path(path) if path else resolve_kubeconfig_path()

    def _read_data(self) -> dict:
        """Read and parse the raw mapping"""
        try:
            text = self.path.read_text()
        except FileNotFoundError as exc:
            raise LoadError(self.path, "file does not exist") from exc
        except OSError as exc:
            raise LoadError(self.path, exc.strerror or str(exc)) from exc

        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise LoadError(self.path, f"invalid YAML: {exc}") from exc

        # empty file is an empty config
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise LoadError(self.path, f"expected a mapping at top level, got {type(raw).__name__}")
        return raw

    def _write_data(self, data: dict):
        """Write raw data through a temp file in the same directory, then rename over the target"""
        target = self.path.resolve()
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

        tmp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            try:
                mode = stat.S_IMODE(target.stat().st_mode)
            except FileNotFoundError:
                mode = 0o600
            fd, tmp_name = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp")
            with os.fdopen(fd, "w") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise SaveError(self.path, exc.strerror or str(exc)) from exc

    def load(self) -> KubeConfig:
        """Load the kubeconfig document"""
        logger.debug("loading kubeconfig from %s", self.path)
        data = self._read_data()
        try:
            return KubeConfig.from_dict(data)
        except ValueError as exc:
            raise LoadError(self.path, str(exc)) from exc

    def save(self, config: KubeConfig):
        """Save the full document, replacing the file"""
        logger.debug("saving kubeconfig to %s", self.path)
        self._write_data(config.to_dict())

    def __repr__(self):
        return f"<KubeConfigStorage path={self.path}>"
