from doc_translator.translation.base import BaseTranslationPass
from doc_translator.translation.factory import TranslatorFactory
from doc_translator.translation.models import LanguagePair
from doc_translator.translation.reviewer import QualityReviewer
from doc_translator.translation.translator import Translator

__all__ = [
    "BaseTranslationPass",
    "LanguagePair",
    "QualityReviewer",
    "Translator",
    "TranslatorFactory",
]
