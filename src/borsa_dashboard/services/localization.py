"""UI copy lookup with per-instance locale."""
from borsa_dashboard.errors import ValidationFailed

DEFAULT_LOCALE = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "appName": "Borsa AI",
        "signIn": "Sign In",
        "signOut": "Sign Out",
        "upgradePlan": "Upgrade Plan",
        "signInRequired": "Please sign in to use this feature",
        "upgradeRequired": "Upgrade your plan to unlock this feature",
        "locked": "Locked",
        "staleData": "Prices may be outdated",
        "liveData": "Live",
        "addedToWishlist": "Added to wishlist",
        "removedFromWishlist": "Removed from wishlist",
        "notificationsOn": "Notifications enabled",
        "notificationsOff": "Notifications disabled",
        "rise": "Rise",
        "watch": "Watch",
        "risky": "Risky",
    },
    "tr": {
        "appName": "Borsa AI",
        "signIn": "Giriş Yap",
        "signOut": "Çıkış Yap",
        "upgradePlan": "Planı Yükselt",
        "signInRequired": "Bu özelliği kullanmak için giriş yapın",
        "upgradeRequired": "Bu özelliği açmak için planınızı yükseltin",
        "locked": "Kilitli",
        "staleData": "Fiyatlar güncel olmayabilir",
        "liveData": "Canlı",
        "addedToWishlist": "İstek listesine eklendi",
        "removedFromWishlist": "İstek listesinden çıkarıldı",
        "rise": "Yükseliş",
        "watch": "İzle",
        "risky": "Riskli",
    },
    "ru": {
        "signIn": "Войти",
        "signOut": "Выйти",
        "upgradePlan": "Улучшить план",
        "signInRequired": "Войдите, чтобы использовать эту функцию",
        "upgradeRequired": "Улучшите план, чтобы открыть эту функцию",
        "locked": "Заблокировано",
        "staleData": "Цены могут быть устаревшими",
        "rise": "Рост",
        "watch": "Наблюдать",
        "risky": "Рискованно",
    },
    "de": {
        "signIn": "Anmelden",
        "signOut": "Abmelden",
        "upgradePlan": "Plan upgraden",
        "signInRequired": "Bitte melden Sie sich an, um diese Funktion zu nutzen",
        "upgradeRequired": "Upgraden Sie Ihren Plan, um diese Funktion freizuschalten",
        "locked": "Gesperrt",
        "staleData": "Kurse sind möglicherweise veraltet",
        "rise": "Steigend",
        "watch": "Beobachten",
        "risky": "Riskant",
    },
}


class Localization:
    """Translate copy keys; missing keys fall back to English, then to the key itself."""

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = DEFAULT_LOCALE
        self.set_locale(locale)

    @staticmethod
    def available() -> list[str]:
        return list(TRANSLATIONS)

    def set_locale(self, locale: str) -> None:
        locale = locale.lower()
        if locale not in TRANSLATIONS:
            raise ValidationFailed(f"Unsupported language '{locale}'")
        self.locale = locale

    def t(self, key: str) -> str:
        return TRANSLATIONS[self.locale].get(key) or TRANSLATIONS[DEFAULT_LOCALE].get(key, key)
