"""
Module Registry for the moon phase console.

Printable modules register themselves with the @register_module decorator.
Front ends (the CLI) validate a config against the module's schema and run
the module by type id against a printer driver.

Example usage:
    from moonphase.module_registry import register_module

    @register_module(
        type_id="moon_phase",
        label="Moon Phase",
        description="Phase, illumination and age of the moon",
        config_schema={...},
        config_class=MoonPhaseConfig,
    )
    def format_moon_phase_receipt(printer, config, module_name):
        printer.print_header(module_name or "MOON PHASE")
        ...
"""

from dataclasses import dataclass
from typing import Dict, Any, Callable, Optional
import logging

from jsonschema import validate, ValidationError


logger = logging.getLogger(__name__)


@dataclass
class ModuleDefinition:
    """
    Metadata for a registered module type.

    Attributes:
        type_id: Unique identifier for the module type (e.g., "moon_phase")
        label: Human-readable name, used as the receipt header by default
        description: Brief description of what the module prints
        execute_fn: The function to call when printing (format_xxx_receipt)
        config_schema: JSON Schema the module config must satisfy (optional)
        config_class: Pydantic config class checked after the schema (optional)
    """
    type_id: str
    label: str
    description: str
    execute_fn: Callable
    config_schema: Optional[Dict[str, Any]] = None
    config_class: Optional[type] = None


# Global registry of all modules
_registry: Dict[str, ModuleDefinition] = {}


def register_module(
    type_id: str,
    label: str,
    description: str = "",
    config_schema: Optional[Dict[str, Any]] = None,
    config_class: Optional[type] = None,
):
    """Decorator to register a module; returns the original function."""
    def decorator(fn: Callable) -> Callable:
        if type_id in _registry:
            logger.warning(f"Module '{type_id}' is already registered. Overwriting.")

        _registry[type_id] = ModuleDefinition(
            type_id=type_id,
            label=label,
            description=description,
            execute_fn=fn,
            config_schema=config_schema,
            config_class=config_class,
        )
        logger.debug(f"Registered module: {type_id}")
        return fn

    return decorator


def get_module(type_id: str) -> Optional[ModuleDefinition]:
    """Get a module definition by its type ID, or None."""
    return _registry.get(type_id)


def execute_module_by_type(
    module_type: str,
    printer,
    config: Dict[str, Any],
    module_name: Optional[str] = None,
) -> bool:
    """
    Execute a module by its type ID.

    Args:
        module_type: The module type identifier (e.g., "moon_phase")
        printer: The printer driver instance
        config: Module configuration dictionary
        module_name: Header for the receipt (defaults to the module label)

    Returns:
        True if the module executed successfully, False otherwise
    """
    defn = _registry.get(module_type)

    if defn is None:
        logger.warning(f"Unknown module type: {module_type}")
        return False

    try:
        defn.execute_fn(printer, config, module_name or defn.label)
        return True
    except Exception as e:
        logger.error(f"Error executing module '{module_type}': {e}", exc_info=True)
        return False


def validate_module_config(module_type: str, config: Dict[str, Any]) -> None:
    """
    Validate a module configuration against its registered schema and class.

    Raises:
        ValueError: If the module type is unknown or validation fails
    """
    defn = _registry.get(module_type)
    if defn is None:
        raise ValueError(f"Unknown module type: {module_type}")

    if defn.config_schema:
        try:
            validate(instance=config, schema=defn.config_schema)
        except ValidationError as e:
            path = ".".join(str(p) for p in e.path) if e.path else "root"
            raise ValueError(f"Invalid configuration for {module_type} at '{path}': {e.message}")

    if defn.config_class is not None:
        # Pydantic errors are ValueErrors as well
        defn.config_class(**config)
