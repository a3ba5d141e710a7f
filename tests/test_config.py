"""Tests for LayoutConfig."""

import json

import pytest
from reportlab.lib.units import mm

from mdproof.config import PAGE_SIZES, LayoutConfig
from mdproof.engine.geometry import Margins, Size
from mdproof.exceptions import ConfigurationError


class TestDefaults:
    def test_a4_with_20mm_margins(self):
        config = LayoutConfig()

        assert config.page_size == PAGE_SIZES["a4"]
        assert config.margins == Margins.uniform(20 * mm)
        assert config.content_width == pytest.approx(config.page_size.width - 40 * mm)

    def test_content_area(self, small_config):
        assert small_config.content_top == 750.0
        assert small_config.content_bottom == 50.0
        assert small_config.content_height == 700.0

    def test_font_sizes(self):
        config = LayoutConfig()

        assert config.font_size_for(None) == 12.0
        assert config.font_size_for(1) == 32.0
        assert config.font_size_for(4) == 16.0

    def test_defaults_validate(self):
        assert LayoutConfig().validate() is not None


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"margins": Margins.uniform(400.0)},
            {"line_spacing": 0.5},
            {"list_indentation": -1.0},
            {"default_font_size": 0.0},
            {"image_dpi": 0.0},
            {"max_nesting_depth": 0},
            {"font_files": {"serif": "x.ttf"}},
        ],
    )
    def test_rejects_unusable_values(self, overrides):
        with pytest.raises(ConfigurationError):
            LayoutConfig(**overrides).validate()


class TestFromDict:
    def test_millimetre_keys(self):
        config = LayoutConfig.from_dict(
            {"page_size": "Letter", "margin_mm": 10, "margin_left_mm": 30, "list_indentation_mm": 5}
        )

        assert config.page_size == PAGE_SIZES["letter"]
        assert config.margins.top == pytest.approx(10 * mm)
        assert config.margins.left == pytest.approx(30 * mm)
        assert config.list_indentation == pytest.approx(5 * mm)

    def test_custom_page_dimensions(self):
        config = LayoutConfig.from_dict({"page_width_mm": 100, "page_height_mm": 150})

        assert config.page_size == Size.from_mm(100, 150)

    def test_heading_sizes_merge_with_defaults(self):
        config = LayoutConfig.from_dict({"heading_font_sizes": {"2": 24}})

        assert config.heading_font_sizes == {1: 32.0, 2: 24.0, 3: 20.0, 4: 16.0}

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            LayoutConfig.from_dict({"colour": "red"})

    def test_unknown_page_size(self):
        with pytest.raises(ConfigurationError):
            LayoutConfig.from_dict({"page_size": "a0"})

    @pytest.mark.parametrize(
        "data",
        [
            {"margin_mm": "wide"},
            {"line_spacing": "double"},
            {"missing_image_size_mm": 40},
            {"heading_font_sizes": [32, 28]},
            {"max_nesting_depth": None},
        ],
    )
    def test_badly_typed_values(self, data):
        with pytest.raises(ConfigurationError) as excinfo:
            LayoutConfig.from_dict(data)

        assert next(iter(data)) in str(excinfo.value)


class TestFromFile:
    def test_reads_json(self, temp_dir):
        path = temp_dir / "layout.json"
        path.write_text(json.dumps({"title": "Notes", "line_spacing": 1.5}))

        config = LayoutConfig.from_file(path)

        assert config.title == "Notes"
        assert config.line_spacing == 1.5

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "layout.json"
        path.write_text("{nope")

        with pytest.raises(ConfigurationError):
            LayoutConfig.from_file(path)

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError):
            LayoutConfig.from_file(temp_dir / "absent.json")

    def test_non_object(self, temp_dir):
        path = temp_dir / "layout.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError):
            LayoutConfig.from_file(path)
