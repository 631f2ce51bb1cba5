"""
Language Identification via langdetect
======================================
Wraps the langdetect port of Google's language-detection library.

Features:
- Deterministic results (fixed DetectorFactory seed)
- Probability threshold for "dominant" language
- No-feature text (digits, punctuation) reports no language

Requires: pip install langdetect
"""

from typing import Any, Dict, List, Optional, Tuple

from ..base import IntegrationBase
from ..logging_utils import get_logger
from .base import LanguageIdentifier

logger = get_logger('textcheck.langdetect')


class LangDetectIdentifier(IntegrationBase, LanguageIdentifier):
    """LanguageIdentifier backed by langdetect."""

    INTEGRATION_NAME = "langdetect"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, min_probability: float = 0.5, seed: int = 0):
        """
        Args:
            min_probability: Minimum probability for the top language to
                count as dominant
            seed: Seed for langdetect's randomised detector
        """
        super().__init__()
        self.min_probability = min_probability
        self.seed = seed
        self._detect_langs = None
        self._exception_cls = Exception
        self._initialize()

    def _initialize(self):
        try:
            from langdetect import DetectorFactory, detect_langs
            from langdetect.lang_detect_exception import LangDetectException

            DetectorFactory.seed = self.seed
            self._detect_langs = detect_langs
            self._exception_cls = LangDetectException
            self._available = True

        except ImportError as e:
            self._error = f"langdetect not installed: {e}"
            self._available = False

    def get_status(self) -> Dict[str, Any]:
        return {
            'available': self.is_available,
            'error': self._error,
            'min_probability': self.min_probability,
        }

    def probabilities(self, text: str) -> List[Tuple[str, float]]:
        """All candidate languages with their probabilities, best first."""
        if not self.is_available or not text or not text.strip():
            return []
        try:
            return [(lang.lang, lang.prob) for lang in self._detect_langs(text)]
        except self._exception_cls as e:
            logger.debug(f"No language features in text: {e}")
            return []

    def dominant_language(self, text: str) -> Optional[str]:
        candidates = self.probabilities(text)
        if not candidates:
            return None
        lang, prob = candidates[0]
        if prob < self.min_probability:
            return None
        return lang
