"""YAML <-> Value bridge built on PyYAML."""

import json
import logging
from typing import Any, Optional

import yaml

from ..types import FormatBridgeInterface, Format, ParseError, ConversionError
from ..error_handler import ErrorHandler
from ..models.value import Value
from ..utils.validation import ValidationUtils


class _NarrowingLoader(yaml.SafeLoader):
    """
    SafeLoader variant whose scalar and collection types all fit the Value model.

    Timestamps keep their source spelling, ``!!binary`` keeps its base64
    text, ``!!set`` becomes a mapping with null values and
    ``!!omap``/``!!pairs`` become plain mappings.
    """


def _construct_verbatim(loader: _NarrowingLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


def _construct_binary(loader: _NarrowingLoader, node: yaml.ScalarNode) -> str:
    return "".join(loader.construct_scalar(node).split())


def _construct_set(loader: _NarrowingLoader, node: yaml.MappingNode):
    data = {}
    yield data
    data.update(dict.fromkeys(loader.construct_mapping(node)))


def _construct_pairs(loader: _NarrowingLoader, node: yaml.SequenceNode):
    data = {}
    yield data
    if not isinstance(node, yaml.SequenceNode):
        raise yaml.constructor.ConstructorError(
            "while constructing an ordered map", node.start_mark,
            f"expected a sequence, but found {node.id}", node.start_mark)
    for subnode in node.value:
        if not isinstance(subnode, yaml.MappingNode) or len(subnode.value) != 1:
            raise yaml.constructor.ConstructorError(
                "while constructing an ordered map", node.start_mark,
                "expected a single mapping item", subnode.start_mark)
        key_node, value_node = subnode.value[0]
        data[loader.construct_object(key_node)] = loader.construct_object(value_node)


_NarrowingLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_verbatim)
_NarrowingLoader.add_constructor("tag:yaml.org,2002:binary", _construct_binary)
_NarrowingLoader.add_constructor("tag:yaml.org,2002:set", _construct_set)
_NarrowingLoader.add_constructor("tag:yaml.org,2002:omap", _construct_pairs)
_NarrowingLoader.add_constructor("tag:yaml.org,2002:pairs", _construct_pairs)


class _BlockDumper(yaml.SafeDumper):
    """SafeDumper that indents sequences nested under a mapping key."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


class YamlBridge(FormatBridgeInterface):
    """
    Parses YAML text into Values and serializes Values back to block-style YAML.

    Only the first document of a stream is read. Scalars the Value model
    has no variant for are narrowed once, at ingestion (see
    ``_NarrowingLoader``); non-string mapping keys take their JSON
    spelling.
    """

    format = Format.YAML

    def __init__(self, indent: int = 2,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the YAML bridge.

        Args:
            indent: Block indentation width for serialize(); PyYAML only honours 2-9
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.indent = indent
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)

    def parse(self, text: str) -> Value:
        """
        Parse the first YAML document of ``text`` into a Value.

        Raises:
            ParseError: If the first document is not well-formed YAML or is nested too deeply
            ConversionError: If the document holds recursive aliases
        """
        self.error_handler.validate_input(text, Format.YAML)

        documents = yaml.load_all(text, Loader=_NarrowingLoader)
        try:
            data = next(documents, None)
        except yaml.MarkedYAMLError as e:
            position = None
            if e.problem_mark is not None:
                position = (e.problem_mark.line + 1, e.problem_mark.column + 1)
            message = " ".join(part for part in (e.context, e.problem) if part)
            raise ParseError(message or str(e), Format.YAML, position) from e
        except yaml.YAMLError as e:
            raise ParseError(str(e), Format.YAML) from e
        except RecursionError as e:
            raise ParseError("Document is nested too deeply", Format.YAML) from e
        finally:
            documents.close()

        value = self._to_value(data)
        self.logger.debug(f"Parsed YAML document with root kind: {value.kind.value}")
        return value

    def serialize(self, value: Value) -> str:
        """Serialize a Value as a YAML document ending in a newline."""
        output = yaml.dump(
            value.to_python(),
            Dumper=_BlockDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=self.indent,
        )
        # Plain scalar roots are followed by an explicit document end marker
        if output.endswith("\n...\n"):
            output = output[:-len("...\n")]
        return output

    def _to_value(self, data: Any) -> Value:
        try:
            validation_result = ValidationUtils.validate_structure(data)
            if not validation_result.is_valid:
                raise ConversionError(
                    "; ".join(error.message for error in validation_result.errors))
            for warning in validation_result.warnings:
                self.logger.warning(warning)
            return Value.from_python(self._narrow(data))
        except RecursionError as e:
            raise ParseError("Document is nested too deeply", Format.YAML) from e

    def _narrow(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {self._narrow_key(key): self._narrow(item) for key, item in data.items()}
        if isinstance(data, list):
            return [self._narrow(item) for item in data]
        return data

    def _narrow_key(self, key: Any) -> str:
        if isinstance(key, str):
            return key
        if key is None or isinstance(key, (bool, int, float)):
            return json.dumps(key)
        raise ConversionError(f"Unsupported mapping key type: {type(key).__name__}")
