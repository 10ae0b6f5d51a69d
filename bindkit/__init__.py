"""
BindKit - Go declaration generation from a browser-automation API description
"""

def _check_dependencies():
    """Check for required dependencies"""
    try:
        import pydantic
    except ImportError:
        raise ImportError(
            "BindKit requires pydantic to be installed.\n"
            "Install with: pip install pydantic"
        )

    if not pydantic.VERSION.startswith("2"):
        raise ImportError(f"BindKit requires pydantic 2.x, found {pydantic.VERSION}")

# Check dependencies on import
_check_dependencies()

# Import main API only after dependency check
from .core.config import get_version, load_bindkit_config, BindKitConfig
from .core.naming import NameTransformer, to_go_name
from .core.integrator import structs, interfaces, must_wrappers, validate, generate_all
from .introspection import load_description, load_signature_table

__version__ = get_version()

__all__ = [
    # Main functions
    'structs',
    'interfaces',
    'must_wrappers',
    'validate',
    'generate_all',

    # Loading
    'load_description',
    'load_signature_table',
    'load_bindkit_config',
    'BindKitConfig',

    # Naming
    'NameTransformer',
    'to_go_name',

    # Version
    '__version__'
]
