"""Named transform steps and chain construction from settings"""

from typing import TYPE_CHECKING

from mdremark.core.plugins.autolink import AutolinkHeadingsStep
from mdremark.core.plugins.base import TransformStep
from mdremark.core.plugins.external_links import ExternalLinksStep
from mdremark.core.plugins.slug import SlugStep
from mdremark.core.plugins.squeeze import SqueezeParagraphsStep
from mdremark.errors import ConfigError

if TYPE_CHECKING:
    from mdremark.config import Settings


STEPS: dict[str, type[TransformStep]] = {
    SlugStep.name:              SlugStep,
    AutolinkHeadingsStep.name:  AutolinkHeadingsStep,
    SqueezeParagraphsStep.name: SqueezeParagraphsStep,
    ExternalLinksStep.name:     ExternalLinksStep,
}

# Slug ids must exist before autolink-headings reads them.
DEFAULT_ORDER = ["slug", "autolink-headings", "squeeze-paragraphs", "external-links"]


def _default_options(name: str, settings: "Settings") -> dict:
    """Options derived from top-level settings for the built-in steps."""
    if name == "autolink-headings":
        return {"class_name": settings.anchor_class_name}
    if name == "external-links":
        return {"target": settings.external_links_target, "rel": settings.external_links_rel}
    return {}


def make_step(name: str, options: dict = None) -> TransformStep:
    """Instantiate a registered step, validating its options."""
    cls = STEPS.get(name)
    if cls is None:
        raise ConfigError(f"Unknown transform step '{name}'. Known: {', '.join(STEPS)}")
    if cls.options_model is None:
        return cls()
    try:
        return cls(cls.options_model(**(options or {})))
    except ValueError as e:
        raise ConfigError(f"Invalid options for transform step '{name}': {e}") from e


def build_chain(settings: "Settings") -> list[TransformStep]:
    """Resolve the configured chain, or the default order when none is configured."""
    if settings.plugins is None:
        return [make_step(name, _default_options(name, settings)) for name in DEFAULT_ORDER]
    return [
        make_step(spec.name, {**_default_options(spec.name, settings), **spec.options})
        for spec in settings.plugins
    ]
