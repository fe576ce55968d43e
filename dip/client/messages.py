"""Localized user-facing auth messages."""

from dip.domain.value import OAuthErrorCode

DEFAULT_LANGUAGE = "tr"

ERROR_TITLES = {
    "tr": "Giriş Hatası",
    "en": "Sign-in Error",
}

OAUTH_ERROR_MESSAGES = {
    "tr": {
        OAuthErrorCode.OAUTH_CANCELED: "OAuth girişi iptal edildi",
        OAuthErrorCode.OAUTH_FAILED: "OAuth girişi başarısız",
        OAuthErrorCode.LOGIN_FAILED: "Oturum açma başarısız, lütfen tekrar giriş yapın",
        OAuthErrorCode.USER_NOT_FOUND: "Kullanıcı bulunamadı",
    },
    "en": {
        OAuthErrorCode.OAUTH_CANCELED: "OAuth sign-in was canceled",
        OAuthErrorCode.OAUTH_FAILED: "OAuth sign-in failed",
        OAuthErrorCode.LOGIN_FAILED: "Sign-in failed, please sign in again",
        OAuthErrorCode.USER_NOT_FOUND: "User not found",
    },
}

GENERIC_ERROR_MESSAGES = {
    "tr": "Giriş başarısız",
    "en": "Sign-in failed",
}

SYNC_FAILED_TITLES = {
    "tr": "Bağlantı Hatası",
    "en": "Connection Error",
}

SYNC_FAILED_MESSAGES = {
    "tr": "Kullanıcı bilgileri senkronize edilemedi",
    "en": "Could not synchronize user information",
}


def _language(language: str) -> str:
    return language if language in OAUTH_ERROR_MESSAGES else DEFAULT_LANGUAGE


def error_title(language: str = DEFAULT_LANGUAGE) -> str:
    return ERROR_TITLES[_language(language)]


def oauth_error_message(code: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Message for an OAuth callback error code.

    Unknown codes get the generic sign-in failure message.
    """
    language = _language(language)
    try:
        return OAUTH_ERROR_MESSAGES[language][OAuthErrorCode(code)]
    except ValueError:
        return GENERIC_ERROR_MESSAGES[language]


def sync_failed_title(language: str = DEFAULT_LANGUAGE) -> str:
    return SYNC_FAILED_TITLES[_language(language)]


def sync_failed_message(language: str = DEFAULT_LANGUAGE) -> str:
    return SYNC_FAILED_MESSAGES[_language(language)]
