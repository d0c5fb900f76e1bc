from enum import Enum
from typing import Any, Dict, Optional

from ..validators import coerce_enum
from .base import OperationOptions, OptionsBuilder


class OCRSupportedType(str, Enum):
    """SEARCHABLE_IMAGE may alter the image; SEARCHABLE_IMAGE_EXACT keeps it untouched."""

    SEARCHABLE_IMAGE = "searchable_image"
    SEARCHABLE_IMAGE_EXACT = "searchable_image_exact"


class OCRSupportedLocale(str, Enum):
    DA_DK = "da-DK"
    LT_LT = "lt-LT"
    SL_SI = "sl-SI"
    EL_GR = "el-GR"
    RU_RU = "ru-RU"
    EN_US = "en-US"
    ZH_HK = "zh-HK"
    HU_HU = "hu-HU"
    ET_EE = "et-EE"
    PT_BR = "pt-BR"
    UK_UA = "uk-UA"
    NB_NO = "nb-NO"
    PL_PL = "pl-PL"
    LV_LV = "lv-LV"
    FI_FI = "fi-FI"
    JA_JP = "ja-JP"
    ES_ES = "es-ES"
    BG_BG = "bg-BG"
    EN_GB = "en-GB"
    CS_CZ = "cs-CZ"
    MT_MT = "mt-MT"
    DE_DE = "de-DE"
    HR_HR = "hr-HR"
    SK_SK = "sk-SK"
    SR_SR = "sr-SR"
    CA_CA = "ca-CA"
    MK_MK = "mk-MK"
    KO_KR = "ko-KR"
    DE_CH = "de-CH"
    NL_NL = "nl-NL"
    ZH_CN = "zh-CN"
    SV_SE = "sv-SE"
    IT_IT = "it-IT"
    NO_NO = "no-NO"
    TR_TR = "tr-TR"
    FR_FR = "fr-FR"
    RO_RO = "ro-RO"
    IW_IL = "iw-IL"


DEFAULT_OCR_TYPE = OCRSupportedType.SEARCHABLE_IMAGE
DEFAULT_OCR_LOCALE = OCRSupportedLocale.EN_US


class OCROptions(OperationOptions):
    """Parameters for making a scanned PDF searchable.

    Unset fields fall back to ``searchable_image`` and ``en-US`` on submission.
    """

    ocr_type: Optional[OCRSupportedType] = None
    ocr_lang: Optional[OCRSupportedLocale] = None

    @classmethod
    def builder(cls) -> "OCROptionsBuilder":
        return OCROptionsBuilder()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "ocrLang": (self.ocr_lang or DEFAULT_OCR_LOCALE).value,
            "ocrType": (self.ocr_type or DEFAULT_OCR_TYPE).value,
        }


class OCROptionsBuilder(OptionsBuilder):
    options_class = OCROptions

    def with_ocr_type(self, ocr_type) -> "OCROptionsBuilder":
        self._check_open()
        return self._set("ocr_type", coerce_enum(OCRSupportedType, ocr_type, "ocr_type"))

    def with_ocr_lang(self, ocr_lang) -> "OCROptionsBuilder":
        self._check_open()
        return self._set("ocr_lang", coerce_enum(OCRSupportedLocale, ocr_lang, "ocr_lang"))
