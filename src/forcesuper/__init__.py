"""forcesuper: build-time check that overrides of tagged methods call super."""

__version__ = "0.1.0"

from .config import DEFAULT_REQUIRED_TAG, IGNORE_ANCESTOR_TAG, CheckerConfig, load_config
from .errors import (
    CyclicAncestorError,
    ForceSuperError,
    InconsistentRenewStateError,
    MissingSuperCallError,
)
from .models import ClassIdentity, SourceFile
from .transformer import ForceSuperTransformer, TransformerSet

__all__ = [
    "__version__",
    "CheckerConfig",
    "ClassIdentity",
    "CyclicAncestorError",
    "DEFAULT_REQUIRED_TAG",
    "ForceSuperError",
    "ForceSuperTransformer",
    "IGNORE_ANCESTOR_TAG",
    "InconsistentRenewStateError",
    "MissingSuperCallError",
    "SourceFile",
    "TransformerSet",
    "load_config",
]
