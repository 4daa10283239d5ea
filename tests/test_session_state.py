import pytest
from PIL import Image

from finalpic.models.image_model import ImageData
from finalpic.models.session_state import FilterKind, SessionState, TransformState


def _image_data(size=(4, 3)) -> ImageData:
    img = Image.new("RGBA", size, (10, 20, 30, 255))
    return ImageData(pil_image=img, width=size[0], height=size[1], mode="RGBA", size_bytes=size[0] * size[1] * 4)


@pytest.mark.parametrize("value, expected", [(7.3, 5.0), (-2, 0.1), (0.0, 0.1), (2.5, 2.5), (5.0, 5.0)])
def test_set_scale_clamps(value, expected):
    state = TransformState()
    state.set_scale(value)
    assert state.scale == pytest.approx(expected)


def test_step_scale_clamps_at_upper_bound():
    state = TransformState()
    state.set_scale(4.95)
    state.step_scale(0.1)
    state.step_scale(0.1)
    assert state.scale == 5.0


def test_step_scale_clamps_at_lower_bound():
    state = TransformState()
    for _ in range(20):
        state.step_scale(-0.1)
    assert state.scale == 0.1


def test_step_scale_stays_on_grid():
    state = TransformState()
    for _ in range(3):
        state.step_scale(0.1)
    assert state.scale == 1.3
    assert state.zoom_percent == 130


def test_drag_accumulates_across_gestures():
    state = TransformState()
    state.begin_drag()
    state.update_drag((10, 10))
    state.end_drag()
    assert state.committed_offset == (10, 10)

    state.begin_drag()
    state.update_drag((5, 5))
    assert state.offset == (15, 15)
    state.end_drag()
    assert state.committed_offset == (15, 15)


def test_live_offset_does_not_move_base_until_drag_ends():
    state = TransformState()
    state.begin_drag()
    state.update_drag((3, 4))
    state.update_drag((6, 8))
    assert state.offset == (6, 8)
    assert state.committed_offset == (0.0, 0.0)


def test_end_drag_without_begin_is_noop():
    state = TransformState()
    state.end_drag()
    assert state.committed_offset == (0.0, 0.0)
    assert not state.dragging


def test_update_drag_starts_drag_implicitly():
    state = TransformState()
    state.update_drag((2, -2))
    state.end_drag()
    assert state.committed_offset == (2, -2)


def test_reset_restores_defaults():
    state = TransformState()
    state.set_scale(3.0)
    state.update_drag((40, 50))
    state.end_drag()
    state.set_filter(FilterKind.BLUR)
    state.set_intensity(0.9)

    state.reset()

    assert state.scale == 1.0
    assert state.offset == (0.0, 0.0)
    assert state.committed_offset == (0.0, 0.0)
    assert state.filter_kind is FilterKind.NONE
    assert state.intensity == 0.5


def test_intensity_is_stored_for_none_filter_and_clamped():
    state = TransformState()
    state.set_intensity(0.25)
    assert state.filter_kind is FilterKind.NONE
    assert state.intensity == 0.25
    state.set_intensity(1.7)
    assert state.intensity == 1.0


def test_filter_kind_label_roundtrip():
    for kind in FilterKind:
        assert FilterKind.from_label(kind.label) is kind
    assert FilterKind.from_label("???") is FilterKind.NONE


def test_accepting_new_image_resets_transform():
    session = SessionState()
    session.accept_image(_image_data())
    session.transform.set_scale(2.0)
    session.transform.set_filter(FilterKind.SEPIA)
    session.transform.set_intensity(1.0)
    session.transform.update_drag((7, 7))
    session.transform.end_drag()

    new_image = _image_data((8, 8))
    assert session.accept_image(new_image) is True

    assert session.image is new_image
    assert session.transform == TransformState()


def test_cancelled_pick_keeps_previous_state():
    session = SessionState()
    first = _image_data()
    session.accept_image(first)
    session.transform.set_filter(FilterKind.NOIR)

    assert session.accept_image(None) is False

    assert session.image is first
    assert session.transform.filter_kind is FilterKind.NOIR


def test_session_reset_drops_image():
    session = SessionState()
    session.accept_image(_image_data())
    session.transform.set_scale(0.5)

    session.reset()

    assert not session.has_image
    assert session.transform.scale == 1.0
