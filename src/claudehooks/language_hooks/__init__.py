"""
Language pipelines keyed by detected file language.

Python files are recognised but have no pipeline.
"""

from typing import Any, Dict, Optional, Type

from ..file_types import Language
from .base import LanguageHook
from .go_hook import GoHook
from .typescript_hook import TypeScriptHook

HOOK_REGISTRY: Dict[Language, Type[LanguageHook]] = {
    Language.GO: GoHook,
    Language.TYPESCRIPT: TypeScriptHook,
    Language.JAVASCRIPT: TypeScriptHook,
}


def get_hook(
    language: Language, config: Dict[str, Any], verbose: bool = False
) -> Optional[LanguageHook]:
    """Instantiate the pipeline for a language, or None when there is none."""
    hook_class = HOOK_REGISTRY.get(language)
    if hook_class is None:
        return None
    return hook_class(warn_only_steps=config.get("warn_only_steps", []), verbose=verbose)


__all__ = ["HOOK_REGISTRY", "LanguageHook", "GoHook", "TypeScriptHook", "get_hook"]
