# bodega.config
"""
Configuration centrale du backend.

- Charge le fichier .env de l'environnement (.env.development en dev, .env en prod)
- Normalise les secrets Stripe, la liste des moyens de paiement, CORS/hosts
- Construit un objet Settings unique, créé au démarrage et passé explicitement
  aux services (aucune lecture de os.environ dans la logique métier)
"""
from pathlib import Path
from typing import List, Optional, Tuple
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from bodega.inventory.shipping import SHIPPING_OPTIONS, ShippingOption

BASE_DIR = Path(__file__).resolve().parent.parent

ENVIRONMENTS = {
    "development": "development",
    "production": "production",
    "test": "test",
}

ENV_FILES = {
    "development": ".env.development",
    "production": ".env",
}


def _clean_env(v: Optional[str]) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")


def _flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def _split_list(raw: str) -> List[str]:
    return [v.strip() for v in (raw or "").split(",") if v.strip()]


def _int_env(name: str, default: int) -> int:
    raw = _clean_env(os.getenv(name))
    return int(raw) if raw else default


class Settings(BaseModel):
    """Configuration immuable de l'application (construite une seule fois)."""

    model_config = ConfigDict(frozen=True)

    environment: str = ENVIRONMENTS["development"]

    # Stripe
    stripe_secret_key: str = ""
    stripe_publishable_key: str = ""
    stripe_account_country: str = "US"
    country: str = "ES"
    currency: str = "eur"
    payment_methods: Tuple[str, ...] = ("card",)

    # Webhook
    webhook_secret: str = ""
    webhook_allow_unsigned: bool = False
    event_ttl_seconds: int = 7 * 24 * 3600

    # Catalogue: taille de page explicite par ressource
    product_page_size: int = 3
    price_page_size: int = 3
    sku_page_size: int = 1

    shipping_options: Tuple[ShippingOption, ...] = SHIPPING_OPTIONS

    # HTTP
    cors_origins: Tuple[str, ...] = ("*",)
    allowed_hosts: Tuple[str, ...] = ("localhost", "127.0.0.1", "testserver")

    # Redis (rate limiting + registre des événements webhook)
    redis_url: Optional[str] = None
    use_fake_redis: bool = False
    disable_rate_limit: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment == ENVIRONMENTS["development"]

    @property
    def is_production(self) -> bool:
        return self.environment == ENVIRONMENTS["production"]

    def public_config(self) -> dict:
        """Configuration exposée au storefront (GET /config)."""
        return {
            "stripePublishableKey": self.stripe_publishable_key,
            "stripeCountry": self.stripe_account_country,
            "country": self.country,
            "currency": self.currency,
            "paymentMethods": list(self.payment_methods),
            "shippingOptions": [o.model_dump() for o in self.shipping_options],
        }


def load_settings(environment: Optional[str] = None, root: Optional[Path] = None) -> Settings:
    """
    Charge le .env de l'environnement demandé puis construit Settings.
    - environment: development (défaut) | production | test (BODEGA_ENV sinon)
    - root: répertoire contenant les fichiers .env (BASE_DIR par défaut)
    Un fichier .env absent n'est pas une erreur: l'environnement du process suffit.
    """
    env = _clean_env(environment or os.getenv("BODEGA_ENV")) or ENVIRONMENTS["development"]
    if env not in ENVIRONMENTS:
        raise ValueError(f"Environnement inconnu: {env}")

    env_file = ENV_FILES.get(env)
    if env_file:
        load_dotenv(dotenv_path=(root or BASE_DIR) / env_file, override=False)

    payment_methods = _split_list(os.getenv("PAYMENT_METHODS", "")) or ["card"]
    webhook_secret = _clean_env(
        os.getenv("STRIPE_SHOPPING_CART_WEBHOOK_SECRET") or os.getenv("STRIPE_WEBHOOK_SECRET")
    )

    return Settings(
        environment=env,
        stripe_secret_key=_clean_env(os.getenv("STRIPE_SECRET_KEY")),
        stripe_publishable_key=_clean_env(os.getenv("STRIPE_PUBLISHABLE_KEY")),
        stripe_account_country=_clean_env(os.getenv("STRIPE_ACCOUNT_COUNTRY")) or "US",
        payment_methods=tuple(payment_methods),
        webhook_secret=webhook_secret,
        webhook_allow_unsigned=_flag("WEBHOOK_ALLOW_UNSIGNED"),
        event_ttl_seconds=_int_env("WEBHOOK_EVENT_TTL_SECONDS", 7 * 24 * 3600),
        product_page_size=_int_env("CATALOG_PRODUCT_PAGE_SIZE", 3),
        price_page_size=_int_env("CATALOG_PRICE_PAGE_SIZE", 3),
        sku_page_size=_int_env("CATALOG_SKU_PAGE_SIZE", 1),
        cors_origins=tuple(_split_list(os.getenv("CORS_ORIGINS", "*"))),
        allowed_hosts=tuple(_split_list(os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1"))),
        redis_url=_clean_env(os.getenv("REDIS_URL") or os.getenv("RATE_LIMIT_REDIS_URL")) or None,
        use_fake_redis=_flag("USE_FAKE_REDIS_FOR_TESTS"),
        disable_rate_limit=_flag("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"),
    )
