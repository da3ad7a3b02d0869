"Reconciled view over Serato DJ metadata tags."

from importlib import metadata

from .container import Container
from .diagnostics import MarkerDiagnostics
from .models import Color, TagKind

__all__ = ["Color", "Container", "MarkerDiagnostics", "TagKind", "__version__"]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("serato-meta")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
