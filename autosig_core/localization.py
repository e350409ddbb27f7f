# autosig_core/localization.py

from __future__ import annotations
from typing import Any, Dict, Optional

RESOURCES: Dict[str, Any] = {
    "signature": {
        "insertSuccess": {
            "en": "The default signature is automatically added. Open the task pane for more features.",
            "nl": "De standaardhandtekening is automatisch ingevoegd. Open het zijpaneel voor meer functionaliteiten.",
        },
        "noDefault": {
            "en": "The default signature is not set. Open the task pane and set your signature.",
            "nl": "De standaardhandtekening is niet ingesteld. Open het zijpaneel om deze in te stellen.",
        },
        "invalid": {
            "en": "The default signature is not set. Open the task pane and set your signature.",
            "nl": "De standaardhandtekening is niet ingesteld. Open het zijpaneel om deze in te stellen.",
        },
        "httpError": {
            "en": "Failed to insert the default signature. Open the task pane and validate your signature.",
            "nl": "Kan de standaardhandtekening niet invoegen. Open het zijpaneel en controleer uw handtekening.",
        },
        "tooLarge": {
            "en": "The signature is too large to insert ({0} of at most {1} characters).",
            "nl": "De handtekening is te groot om in te voegen ({0} van maximaal {1} tekens).",
        },
    },
    "attachment": {
        "localhostUrl": {
            "en": "The attachment cannot be added to the item. This is because the server can't reach your localhost to download the image. This does work in production environments.",
            "nl": "De bijlage kan niet worden toegevoegd aan het item. Dit komt omdat de server niet bij je localhost kan om de afbeelding te downloaden. Dit werkt wel op productie omgevingen.",
        },
    },
    "notification": {
        "showTaskPane": {
            "en": "Open the task pane",
            "nl": "Open het zijpaneel",
        },
    },
    "errors": {
        "unknown": {
            "en": "An unknown error occurred.",
            "nl": "Er is een onbekende fout opgetreden.",
        },
    },
}


class Translator:
    """
    Looks up dotted keys (``signature.noDefault``) for the active culture.

    A missing culture falls back to the default culture; a missing key yields
    the key itself. Positional ``{0}`` placeholders are filled from ``args``.
    """

    def __init__(self, culture: Optional[str] = None, default_culture: str = "en", resources: Optional[Dict[str, Any]] = None):
        self.default_culture = default_culture
        self.culture = self.normalize_culture(culture) or default_culture
        self.resources = resources if resources is not None else RESOURCES

    @staticmethod
    def normalize_culture(culture: Optional[str]) -> Optional[str]:
        if not culture:
            return None
        return culture.split("-")[0].lower()

    def translate(self, key: str, *args: Any) -> str:
        resource = self._lookup(key)
        if resource is None:
            return key
        if not args:
            return resource
        try:
            return resource.format(*args)
        except (IndexError, KeyError):
            return resource

    __call__ = translate

    def _lookup(self, key: str) -> Optional[str]:
        node: Any = self.resources
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        if not isinstance(node, dict):
            return None
        return node.get(self.culture) or node.get(self.default_culture)
