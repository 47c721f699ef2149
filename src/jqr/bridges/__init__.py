"""Format bridges between document text and the Value model."""

from .json_bridge import JsonBridge
from .yaml_bridge import YamlBridge

__all__ = ["JsonBridge", "YamlBridge"]
