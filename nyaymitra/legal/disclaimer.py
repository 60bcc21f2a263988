"""Disclaimer blocks appended to every rendered document."""

DISCLAIMER_EN = (
    "DISCLAIMER: This document has been generated with the assistance of artificial "
    "intelligence technology. While every effort has been made to ensure accuracy and "
    "compliance with applicable legal standards, this document is provided \"as is\" and "
    "does not constitute legal advice. The user is strongly advised to review and verify "
    "all contents with a qualified legal professional before submission to any court, "
    "tribunal, or government authority. The creators and operators of this application "
    "accept no liability for any errors, omissions, or consequences arising from the use "
    "of this document.\n\n"
    "Generated via NyayMitra - AI Legal Document Assistant"
)

DISCLAIMER_HI = (
    "अस्वीकरण: यह दस्तावेज़ कृत्रिम बुद्धिमत्ता (AI) तकनीक की सहायता से तैयार किया गया है। "
    "यथासंभव सटीकता और कानूनी मानकों के अनुपालन का प्रयास किया गया है, फिर भी यह दस्तावेज़ "
    "\"जैसा है\" के आधार पर प्रदान किया गया है और यह कानूनी सलाह नहीं है। उपयोगकर्ता को किसी भी "
    "न्यायालय, न्यायाधिकरण, या सरकारी प्राधिकरण को प्रस्तुत करने से पहले एक योग्य कानूनी पेशेवर से "
    "इसकी समीक्षा और सत्यापन कराने की दृढ़ सलाह दी जाती है।\n\n"
    "NyayMitra - AI विधिक दस्तावेज़ सहायक द्वारा निर्मित"
)

_HINDI = {"hindi", "hi", "हिंदी", "हिन्दी"}


def is_hindi(language: str | None) -> bool:
    return (language or "").strip().lower() in _HINDI


def get_disclaimer(language: str | None = "english") -> str:
    """Return the disclaimer in the output language (Hindi or English)."""
    return DISCLAIMER_HI if is_hindi(language) else DISCLAIMER_EN
