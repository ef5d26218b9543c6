import sys
import json
import importlib.util
from abc import ABC, abstractmethod
from typing import Dict, List, NamedTuple, Optional, Type
from pathlib import Path

from .settings import FieldRecorder

# Verbose mode (disabled by default, enabled with --verbose)
VERBOSE = False

# Menu order of the catalog; categories carry no behaviour.
CATEGORIES = [
    "Transform",
    "Alphabets",
    "Ciphers",
    "Polybius Square Ciphers",
    "Encoding",
    "Modern Cryptography",
]

ENCODE = "encode"
DECODE = "decode"
MODES = ((ENCODE, "Encode"), (DECODE, "Decode"))

def set_verbose(enabled: bool):
    global VERBOSE
    VERBOSE = enabled

def log_info(msg: str):
    """Print info message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[INFO] {msg}", file=sys.stderr)

def log_warn(msg: str):
    """Print warning message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[WARN] {msg}", file=sys.stderr)

# ==========================================
#  FRAMEWORK: Abstract Base Class & Registry
# ==========================================

class Transform(ABC):
    """
    Abstract base class that every pipeline stage implements.

    A transform owns its configuration as plain attributes. `configure`
    exposes them to a host through a ConfigEditor, and `apply` must be
    total: bad settings or malformed input yield a descriptive string,
    never an exception.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The registry id for this transform."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable label shown for the stage."""
        pass

    description = ""
    category = "Transform"

    def configure(self, editor) -> None:
        """Expose configurable fields to `editor`. No fields by default."""

    @abstractmethod
    def apply(self, text: str) -> str:
        pass

    def settings(self) -> Dict[str, object]:
        """Snapshot of the current configuration, keyed by field."""
        recorder = FieldRecorder()
        self.configure(recorder)
        return {field.key: field.value for field in recorder.fields}

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r}>"

TRANSFORM_REGISTRY: Dict[str, Type[Transform]] = {}

def register_transform(cls):
    """Decorator to auto-register transform factories."""
    if cls.name in TRANSFORM_REGISTRY and TRANSFORM_REGISTRY[cls.name] is not cls:
        log_warn(f"Transform '{cls.name}' re-registered by {cls.__module__}.{cls.__name__}")
    TRANSFORM_REGISTRY[cls.name] = cls
    return cls

def create_transform(name: str) -> Optional[Transform]:
    """Return a fresh, default-configured transform, or None for an unknown id."""
    factory = TRANSFORM_REGISTRY.get(name)
    if factory is None:
        return None
    return factory()

class CatalogEntry(NamedTuple):
    name: str
    display_name: str
    description: str
    category: str

def catalog() -> List[CatalogEntry]:
    """Every registered transform, grouped by category in menu order."""
    entries = [
        CatalogEntry(cls.name, cls.display_name, cls.description, cls.category)
        for cls in TRANSFORM_REGISTRY.values()
    ]

    def rank(entry):
        if entry.category in CATEGORIES:
            return CATEGORIES.index(entry.category)
        return len(CATEGORIES)

    return sorted(entries, key=rank)

# ==========================================
#  PLUGIN SYSTEM: Dynamic Transform Loading
# ==========================================

def load_plugins(plugin_dir: str = None) -> List[str]:
    """
    Load transform plugins from a directory with manifest.json.

    Args:
        plugin_dir: Path to plugins directory (default: ./plugins next to this package)

    Returns:
        List of successfully loaded transform ids
    """
    if plugin_dir is None:
        plugin_dir = Path(__file__).parent / "plugins"
    else:
        plugin_dir = Path(plugin_dir)

    if not plugin_dir.exists():
        return []

    manifest_path = plugin_dir / "manifest.json"
    if not manifest_path.exists():
        log_warn(f"No manifest.json in {plugin_dir}. Skipping plugin loading.")
        return []

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log_warn(f"Failed to read manifest.json: {e}")
        return []

    loaded = []
    for entry in manifest.get("plugins", []):
        filename = entry.get("file")
        expected = entry.get("transform")

        if not filename:
            continue

        filepath = plugin_dir / filename
        if not filepath.exists():
            log_warn(f"Plugin file not found: {filepath}")
            continue

        try:
            spec = importlib.util.spec_from_file_location(
                f"cipher_pipeline_plugin_{filepath.stem}", filepath
            )
            if spec and spec.loader:
                module = importlib.util.module_from_spec(spec)
                # Plugins may use the framework without importing it
                module.Transform = Transform
                module.register_transform = register_transform
                spec.loader.exec_module(module)

                if expected and expected in TRANSFORM_REGISTRY:
                    loaded.append(expected)
                elif expected:
                    log_warn(f"Plugin {filename} did not register transform '{expected}'")
                else:
                    loaded.append(filename)
        except Exception as e:
            log_warn(f"Failed to load plugin {filename}: {e}")

    return loaded
