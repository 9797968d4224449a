"""
Auto-discovery module loader.

Importing this package imports every module in the modules/ directory,
which triggers their @register_module decorators.
"""

import importlib
import pkgutil
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

package_dir = Path(__file__).parent

for finder, name, ispkg in pkgutil.iter_modules([str(package_dir)]):
    # Skip private modules (those starting with underscore)
    if not name.startswith("_"):
        try:
            importlib.import_module(f".{name}", __package__)
            logger.debug(f"Auto-imported module: {name}")
        except Exception as e:
            logger.warning(f"Failed to import module '{name}': {e}")
