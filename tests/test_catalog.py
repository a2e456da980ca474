"""Tests for the device catalog and tiers."""

import pytest
from pydantic import ValidationError

from smart_home_planner.catalog import (
    DEFAULT_TIERS,
    DeviceCategory,
    default_catalog,
    filter_by_icon,
    find_any_name,
    find_by_name,
    get_tier,
    index_by_id,
    load_catalog,
    make_specification,
)


def test_default_catalog_ids_are_unique():
    """Test the built-in catalog has unique ids."""
    catalog = default_catalog()
    ids = [spec.id for spec in catalog]

    assert len(catalog) == 16
    assert len(set(ids)) == len(ids)


def test_category_name_and_icon_filled_from_id():
    """Test make_specification fills category metadata."""
    spec = make_specification({"id": 99, "category_id": 2, "device_name": "Camera"})

    assert spec.category_name == "Security Cameras"
    assert spec.category_icon == "camera"


def test_explicit_category_metadata_is_kept():
    """Test explicit category name/icon override the defaults."""
    spec = make_specification({
        "id": 99, "category_id": 1, "device_name": "Router",
        "category_name": "Networking", "category_icon": "router",
    })

    assert spec.category_name == "Networking"
    assert spec.category_icon == "router"


def test_unknown_category_gets_blank_metadata():
    """Test entries with an unknown category id still load."""
    spec = make_specification({"id": 99, "category_id": 42, "device_name": "Gadget"})

    assert spec.category_name == ""
    assert spec.category_icon == ""


def test_load_catalog_rejects_malformed_entry():
    """Test that entries without a device name fail validation."""
    with pytest.raises(ValidationError):
        load_catalog([{"id": 1, "category_id": 1}])


def test_find_by_name_requires_every_fragment():
    """Test find_by_name matches all fragments case-insensitively."""
    catalog = default_catalog()

    assert find_by_name(catalog, "door", "sensor").device_name == "Door/Window Sensor"
    assert find_by_name(catalog, "doorbell").device_name == "Smart Video Doorbell"
    assert find_by_name(catalog, "teleporter") is None


def test_find_any_name():
    """Test find_any_name matches any fragment."""
    catalog = default_catalog()

    assert find_any_name(catalog, "blind", "shade").device_name == "AC Motorized Blinds"
    assert find_any_name(catalog, "entertainment", "tv").device_name == "50-inch Smart TV"


def test_filter_by_icon():
    """Test icon filtering keeps catalog order."""
    cameras = filter_by_icon(default_catalog(), "camera")

    assert [spec.id for spec in cameras] == [3, 4]


def test_index_by_id():
    """Test catalog indexing."""
    specs = index_by_id(default_catalog())

    assert specs[13].category_id == DeviceCategory.CENTRAL_EQUIPMENT
    assert specs[1].interference_frequency_ghz == 2.4


def test_basic_tier_categories():
    """Test basic tier excludes comfort and entertainment."""
    categories = DEFAULT_TIERS["basic"].device_categories

    assert categories.wifi.included
    assert categories.environmental.included
    assert not categories.comfort.included
    assert not categories.entertainment.included
    assert categories.comfort.description == "Not included"


def test_advanced_tier_includes_everything():
    """Test advanced tier includes every category."""
    categories = DEFAULT_TIERS["advanced"].device_categories

    assert all(getattr(categories, name).included for name in type(categories).model_fields)


def test_get_tier():
    """Test tier lookup by id."""
    assert get_tier("intermediate").name == "Enhanced Automation"

    with pytest.raises(ValueError):
        get_tier("platinum")
