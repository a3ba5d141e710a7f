"""Tests for the atom measurement stage."""

import pytest

from mdproof.engine.events import AtomEvent, BlockTag, Break, BreakKind, EndBlock, ImageAtom, StartBlock, TextAtom
from mdproof.engine.geometry import Size
from mdproof.engine.sizer import DEFAULT_MISSING_IMAGE_SIZE, SizedAtom, Sizer


class TestSizer:
    def test_text_is_measured_once(self, stub_metrics):
        events = [AtomEvent(TextAtom("Hello")), AtomEvent(TextAtom("World"))]

        sized = list(Sizer(events, stub_metrics))

        assert sized == [SizedAtom(TextAtom("Hello"), 40, 20), SizedAtom(TextAtom("World"), 40, 20)]
        assert stub_metrics.text_calls == ["Hello", "World"]

    def test_structural_events_pass_through(self, stub_metrics):
        events = [StartBlock(BlockTag.LIST), Break(BreakKind.WORD), EndBlock(BlockTag.LIST)]

        assert list(Sizer(events, stub_metrics)) == events

    def test_image_dimensions(self, metrics_factory):
        metrics = metrics_factory(images={"pic.png": (144.0, 72.0)})

        sized = next(Sizer([AtomEvent(ImageAtom("pic.png"))], metrics))

        assert (sized.width, sized.height) == (144.0, 72.0)

    def test_missing_image_gets_fallback_size(self, stub_metrics):
        sizer = Sizer([AtomEvent(ImageAtom("gone.png"))], stub_metrics)

        sized = next(sizer)

        assert (sized.width, sized.height) == (DEFAULT_MISSING_IMAGE_SIZE.width, DEFAULT_MISSING_IMAGE_SIZE.height)
        assert sizer.missing_images == ["gone.png"]

    def test_custom_missing_size(self, stub_metrics):
        sized = next(Sizer([AtomEvent(ImageAtom("gone.png"))], stub_metrics, Size(10.0, 5.0)))

        assert (sized.width, sized.height) == (10.0, 5.0)

    def test_pulls_lazily(self, stub_metrics):
        def events():
            yield AtomEvent(TextAtom("Hello"))
            raise AssertionError("pulled too far")

        sizer = Sizer(events(), stub_metrics)
        next(sizer)

        assert sizer.count == 1

    def test_unknown_event(self, stub_metrics):
        with pytest.raises(TypeError):
            next(Sizer(["not an event"], stub_metrics))
