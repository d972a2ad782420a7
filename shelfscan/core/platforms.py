"""Platform profiles and the registry the classifier and planner read from.

A profile bundles everything platform-specific: header markers, sample-value
patterns, header hints for the column mapper, the extra export columns and
the optimization list shown to the user.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from slugify import slugify

from .canonical.entities import UNIVERSAL

ValuePredicate = Callable[[str], bool]
HeaderPredicate = Callable[[list[str]], bool]


@dataclass(frozen=True)
class HeaderMarker:
    token: str
    strength: int
    kind: str = "optional_column"
    whole_word: bool = False

    def matches(self, header: str) -> bool:
        """``header`` is expected lowercased, as ``normalize_header`` returns it."""
        if not self.whole_word:
            return self.token in header
        return re.search(rf"(?<![a-z0-9]){re.escape(self.token)}(?![a-z0-9])", header) is not None


@dataclass(frozen=True)
class ValuePattern:
    """Checks sample values of the first column whose header contains ``header_token``."""

    header_token: str
    matches: ValuePredicate
    strength: int


@dataclass(frozen=True)
class CellFormat:
    """Checks every sample cell regardless of its header."""

    name: str
    matches: ValuePredicate
    strength: int


@dataclass(frozen=True)
class HeaderBonus:
    name: str
    applies: HeaderPredicate
    strength: int


@dataclass(frozen=True)
class PlatformProfile:
    key: str
    label: str
    markers: tuple[HeaderMarker, ...] = ()
    value_patterns: tuple[ValuePattern, ...] = ()
    cell_formats: tuple[CellFormat, ...] = ()
    bonuses: tuple[HeaderBonus, ...] = ()
    field_hints: dict[str, tuple[str, ...]] = field(default_factory=dict)
    export_columns: tuple[str, ...] = ()
    optimizations: tuple[str, ...] = ()


def _regex(pattern: str, flags: int = 0) -> ValuePredicate:
    compiled = re.compile(pattern, flags)
    return lambda value: bool(compiled.fullmatch(value.strip()))


def _is_handle(value: str) -> bool:
    text = value.strip()
    return bool(text) and slugify(text) == text


def _is_comma_list(value: str) -> bool:
    parts = [part.strip() for part in value.split(",")]
    return len(parts) > 1 and all(parts)


def _count_containing(headers: list[str], *tokens: str) -> int:
    return sum(1 for header in headers if any(token in header for token in tokens))


def _has_all(*tokens: str) -> HeaderPredicate:
    return lambda headers: all(_count_containing(headers, token) for token in tokens)


AMAZON = PlatformProfile(
    key="amazon",
    label="Amazon",
    markers=(
        HeaderMarker("asin", 30, "required_column", whole_word=True),
        HeaderMarker("product title", 10, "required_column"),
        HeaderMarker("fulfilled-by", 25),
        HeaderMarker("fulfillment-channel", 25),
        HeaderMarker("fulfillment channel", 25),
        HeaderMarker("seller-sku", 20),
        HeaderMarker("seller sku", 20),
        HeaderMarker("external_product_id", 15),
        HeaderMarker("product-id-type", 15),
        HeaderMarker("search terms", 15),
        HeaderMarker("generic_keywords", 15),
        HeaderMarker("bullet point", 10),
        HeaderMarker("bullet_point", 10),
        HeaderMarker("item_name", 10),
        HeaderMarker("subject matter", 10),
        HeaderMarker("manufacturer", 5),
    ),
    value_patterns=(
        ValuePattern("asin", _regex(r"[A-Z0-9]{10}"), 10),
    ),
    cell_formats=(
        CellFormat("asin_format", _regex(r"B0[A-Z0-9]{8}"), 15),
    ),
    bonuses=(
        HeaderBonus(
            "bullet_point_columns",
            lambda headers: _count_containing(headers, "bullet point", "bullet_point") >= 3,
            8,
        ),
    ),
    field_hints={
        "productName": ("product title", "item_name", "item name", "title"),
        "description": ("product description", "product_description", "description"),
        "price": ("price", "standard_price", "your price"),
        "sku": ("asin", "seller-sku", "seller sku", "sku"),
        "category": ("product type", "feed_product_type", "item_type"),
    },
    export_columns=(
        "CopyFlow_Amazon_Backend_Keywords",
        "CopyFlow_Amazon_Search_Terms",
        "CopyFlow_Amazon_Subject_Matter",
    ),
    optimizations=(
        "Amazon backend keywords (249 chars)",
        "Amazon search terms optimization",
        "Bullet points for Amazon format",
        "A+ content suggestions",
    ),
)

SHOPIFY = PlatformProfile(
    key="shopify",
    label="Shopify",
    markers=(
        HeaderMarker("handle", 25, "required_column"),
        HeaderMarker("vendor", 10, "required_column"),
        HeaderMarker("body (html)", 25),
        HeaderMarker("variant", 15),
        HeaderMarker("option1 name", 15),
        HeaderMarker("gift card", 15),
        HeaderMarker("google shopping", 15),
        HeaderMarker("image src", 10),
        HeaderMarker("published", 5),
        HeaderMarker("seo title", 5),
    ),
    value_patterns=(
        ValuePattern("handle", _is_handle, 10),
        ValuePattern("published", _regex(r"true|false", re.I), 5),
        ValuePattern("variant price", _regex(r"\d+\.\d{2}"), 5),
    ),
    bonuses=(
        HeaderBonus("handle_with_vendor", _has_all("handle", "vendor"), 5),
        HeaderBonus(
            "option_columns",
            lambda headers: any(header.startswith("option") for header in headers),
            3,
        ),
    ),
    field_hints={
        "productName": ("title",),
        "description": ("body (html)",),
        "price": ("variant price",),
        "sku": ("variant sku",),
        "category": ("product category", "type"),
    },
    export_columns=(
        "CopyFlow_Shopify_Handle",
        "CopyFlow_Shopify_SEO_Title",
        "CopyFlow_Structured_Data",
    ),
    optimizations=(
        "Shopify SEO handles",
        "Collection descriptions",
        "Product variants optimization",
        "Shopify-specific structured data",
    ),
)

EBAY = PlatformProfile(
    key="ebay",
    label="eBay",
    markers=(
        HeaderMarker("listing_id", 25, "required_column"),
        HeaderMarker("item id", 20, "required_column"),
        HeaderMarker("itemid", 20),
        HeaderMarker("*action", 30),
        HeaderMarker("startprice", 20),
        HeaderMarker("start price", 20),
        HeaderMarker("conditionid", 20),
        HeaderMarker("dispatch time", 15),
        HeaderMarker("buy it now", 15),
        HeaderMarker("reserve price", 15),
        HeaderMarker("duration", 10),
    ),
    value_patterns=(
        ValuePattern("item id", _regex(r"\d{12}"), 10),
        ValuePattern("listing_id", _regex(r"\d{12}"), 10),
        ValuePattern("format", _regex(r"auction|fixedprice|fixed price", re.I), 10),
        ValuePattern("condition", _regex(r"new|used|refurbished", re.I), 5),
    ),
    field_hints={
        "productName": ("title", "*title"),
        "description": ("description", "*description"),
        "price": ("startprice", "*startprice", "start price", "price"),
        "sku": ("item id", "itemid", "listing_id", "customlabel", "custom label"),
        "category": ("category", "*category", "categoryid"),
    },
    export_columns=(
        "CopyFlow_eBay_Auction_Style",
        "CopyFlow_eBay_USP",
        "CopyFlow_eBay_Competitive_Price",
    ),
    optimizations=(
        "eBay auction-style descriptions",
        "eBay category optimization",
        "Competitive pricing strategies",
        "eBay-specific keywords",
    ),
)

ETSY = PlatformProfile(
    key="etsy",
    label="Etsy",
    markers=(
        HeaderMarker("listing id", 20, "required_column"),
        HeaderMarker("tags", 10, "required_column"),
        HeaderMarker("who made", 25),
        HeaderMarker("when made", 25),
        HeaderMarker("is_supply", 20),
        HeaderMarker("materials", 20),
        HeaderMarker("shop section", 20),
        HeaderMarker("currency_code", 15),
    ),
    value_patterns=(
        ValuePattern("listing id", _regex(r"\d{8,12}"), 10),
        ValuePattern("who made", _regex(r"i_did|collective|someone_else", re.I), 10),
        ValuePattern("tags", _is_comma_list, 5),
        ValuePattern("materials", _is_comma_list, 5),
    ),
    field_hints={
        "productName": ("title",),
        "description": ("description",),
        "price": ("price",),
        "sku": ("sku", "listing id"),
        "category": ("shop section", "section"),
    },
    export_columns=(
        "CopyFlow_Etsy_Artisan_Story",
        "CopyFlow_Etsy_Handmade_Feel",
        "CopyFlow_Etsy_Tags",
    ),
    optimizations=(
        "Etsy artisan storytelling",
        "Handmade appeal content",
        "Etsy tags optimization",
        "Creative product descriptions",
    ),
)

WOOCOMMERCE = PlatformProfile(
    key="woocommerce",
    label="WooCommerce",
    markers=(
        HeaderMarker("regular price", 25, "required_column"),
        HeaderMarker("in stock?", 20),
        HeaderMarker("tax status", 20),
        HeaderMarker("backorders allowed?", 20),
        HeaderMarker("visibility in catalog", 20),
        HeaderMarker("short description", 15),
        HeaderMarker("tax class", 15),
        HeaderMarker("is featured?", 15),
        HeaderMarker("attribute 1 name", 15),
        HeaderMarker("sale price", 10),
        HeaderMarker("meta:", 10),
    ),
    value_patterns=(
        ValuePattern("type", _regex(r"simple|variable|grouped|external|variation", re.I), 15),
        ValuePattern("in stock?", _regex(r"[01]"), 5),
        ValuePattern("regular price", _regex(r"\d+(?:\.\d{1,2})?"), 5),
    ),
    bonuses=(
        HeaderBonus("regular_and_sale_price", _has_all("regular price", "sale price"), 5),
        HeaderBonus("attribute_columns", lambda headers: _count_containing(headers, "attribute") > 0, 2),
    ),
    field_hints={
        "productName": ("name",),
        "description": ("description",),
        "price": ("regular price",),
        "sku": ("sku",),
        "category": ("categories",),
    },
    export_columns=(
        "CopyFlow_WooCommerce_Short_Description",
        "CopyFlow_WooCommerce_Attributes",
        "CopyFlow_WooCommerce_SEO_Title",
    ),
    optimizations=(
        "WooCommerce SEO optimization",
        "Product attributes enhancement",
        "Category descriptions",
        "WordPress-specific optimizations",
    ),
)

UNIVERSAL_PROFILE = PlatformProfile(key=UNIVERSAL, label="Universal")


@dataclass
class Registry:
    platforms: dict[str, PlatformProfile] = field(default_factory=dict)

    def register_platform(self, profile: PlatformProfile) -> None:
        self.platforms[str(profile.key).strip().lower()] = profile

    def get_platform(self, key: str) -> PlatformProfile:
        normalized = str(key).strip().lower()
        profile = self.platforms.get(normalized)
        if profile is None:
            raise KeyError(f"No platform registered for key: {normalized}")
        return profile

    def list_platforms(self) -> list[str]:
        # Registration order doubles as the classifier's tie-break order.
        return list(self.platforms.keys())


_registry = Registry()


def register_platform(profile: PlatformProfile) -> None:
    _registry.register_platform(profile)


def get_platform(key: str) -> PlatformProfile:
    return _registry.get_platform(key)


def list_platforms() -> list[str]:
    return _registry.list_platforms()


def detectable_platforms() -> list[PlatformProfile]:
    return [_registry.platforms[key] for key in _registry.list_platforms() if key != UNIVERSAL]


def _register_defaults() -> None:
    for profile in (AMAZON, SHOPIFY, EBAY, ETSY, WOOCOMMERCE, UNIVERSAL_PROFILE):
        if profile.key not in _registry.platforms:
            _registry.register_platform(profile)


_register_defaults()


__all__ = [
    "CellFormat",
    "HeaderBonus",
    "HeaderMarker",
    "PlatformProfile",
    "Registry",
    "ValuePattern",
    "detectable_platforms",
    "get_platform",
    "list_platforms",
    "register_platform",
]
