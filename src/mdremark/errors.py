"""Exception hierarchy for the markdown derivation pipeline"""


class MdRemarkError(Exception):
    """Base class for all mdremark errors."""


class ConfigError(MdRemarkError, ValueError):
    """Invalid settings or transform chain configuration."""


class FrontmatterError(MdRemarkError, ValueError):
    """Front matter block could not be parsed into a mapping."""


class ParseError(MdRemarkError):
    """Raw markdown could not be tokenized into an AST."""


class PluginError(MdRemarkError):
    """A transform step raised while rewriting the AST."""

    def __init__(self, step: str, cause: Exception):
        super().__init__(f"Transform step '{step}' failed: {cause}")
        self.step = step


class RenderError(MdRemarkError):
    """The AST could not be lowered or serialized."""


class UnmappedNodeError(RenderError):
    """An AST node type has no render handler."""

    def __init__(self, node_type: str):
        super().__init__(f"No render handler for AST node type '{node_type}'")
        self.node_type = node_type


class DerivationCycleError(MdRemarkError):
    """A derivation requested its own (node, key) while computing it."""
