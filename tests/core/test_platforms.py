import pytest

from shelfscan.core.platforms import (
    PlatformProfile,
    Registry,
    detectable_platforms,
    get_platform,
    list_platforms,
)


def test_default_platforms_are_registered_in_order() -> None:
    assert list_platforms() == ["amazon", "shopify", "ebay", "etsy", "woocommerce", "universal"]
    assert [profile.key for profile in detectable_platforms()] == [
        "amazon",
        "shopify",
        "ebay",
        "etsy",
        "woocommerce",
    ]


def test_get_platform_is_case_insensitive_and_rejects_unknown_keys() -> None:
    assert get_platform(" Shopify ").label == "Shopify"
    with pytest.raises(KeyError):
        get_platform("bigcartel")


def test_every_detectable_platform_has_three_export_columns_and_four_optimizations() -> None:
    for profile in detectable_platforms():
        assert len(profile.export_columns) == 3
        assert len(profile.optimizations) == 4
        assert all(column.startswith("CopyFlow_") for column in profile.export_columns)


def test_shopify_handle_pattern_uses_slug_rules() -> None:
    handle = get_platform("shopify").value_patterns[0]

    assert handle.matches("red-cotton-shirt")
    assert not handle.matches("Red Cotton Shirt")


def test_registry_lookup() -> None:
    registry = Registry()
    registry.register_platform(PlatformProfile(key="Demo", label="Demo"))

    assert registry.list_platforms() == ["demo"]
    assert registry.get_platform("DEMO").label == "Demo"
