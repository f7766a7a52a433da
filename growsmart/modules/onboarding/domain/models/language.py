# 📄 File: growsmart/modules/onboarding/domain/models/language.py
# 🧭 Purpose (Layman Explanation):
# The list of languages a farmer can pick when they first open Grow Smart AI.
# 🧪 Purpose (Technical Summary):
# Supported language catalogue with display name, native name and flag, plus lookup helpers.
# 🔗 Dependencies:
# pydantic, typing
# 🔄 Connected Modules / Calls From:
# onboarding.domain.services.onboarding_service, onboarding schemas

from typing import Dict, List, Optional

from pydantic import BaseModel


class Language(BaseModel):
    code: str
    name: str
    native_name: str
    flag: str
    flag_emoji: str


SUPPORTED_LANGUAGES: List[Language] = [
    Language(code="english", name="English", native_name="English", flag="US", flag_emoji="🇺🇸"),
    Language(code="hindi", name="Hindi", native_name="हिंदी", flag="IN", flag_emoji="🇮🇳"),
    Language(code="tamil", name="Tamil", native_name="தமிழ்", flag="IN", flag_emoji="🇮🇳"),
    Language(code="telugu", name="Telugu", native_name="తెలుగు", flag="IN", flag_emoji="🇮🇳"),
    Language(code="kannada", name="Kannada", native_name="ಕನ್ನಡ", flag="IN", flag_emoji="🇮🇳"),
    Language(code="marathi", name="Marathi", native_name="मराठी", flag="IN", flag_emoji="🇮🇳"),
    Language(code="gujarati", name="Gujarati", native_name="ગુજરાતી", flag="IN", flag_emoji="🇮🇳"),
    Language(code="bengali", name="Bengali", native_name="বাংলা", flag="BD", flag_emoji="🇧🇩"),
    Language(code="punjabi", name="Punjabi", native_name="ਪੰਜਾਬੀ", flag="IN", flag_emoji="🇮🇳"),
    Language(code="malayalam", name="Malayalam", native_name="മലയാളം", flag="IN", flag_emoji="🇮🇳"),
    Language(code="spanish", name="Spanish", native_name="Español", flag="ES", flag_emoji="🇪🇸"),
    Language(code="portuguese", name="Portuguese", native_name="Português", flag="PT", flag_emoji="🇵🇹"),
    Language(code="japanese", name="Japanese", native_name="日本語", flag="JP", flag_emoji="🇯🇵"),
    Language(code="indonesian", name="Indonesian", native_name="Bahasa Indonesia", flag="ID", flag_emoji="🇮🇩"),
]

_LANGUAGES_BY_CODE: Dict[str, Language] = {language.code: language for language in SUPPORTED_LANGUAGES}


def get_language(code: Optional[str]) -> Optional[Language]:
    if not code:
        return None
    return _LANGUAGES_BY_CODE.get(code.strip().lower())
