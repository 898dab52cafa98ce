import pytest

from eigenviz.colors import (
    component_color,
    dominant_color_name,
    label_color,
    rgb_css,
    rgb_to_hex,
)


class TestComponentColor:

    def test_scaled_to_largest(self):
        assert component_color([0.6, 0.8, 0.0]) == (191, 255, 0)

    def test_sign_is_ignored(self):
        assert component_color([-0.6, 0.8, -0.0]) == component_color([0.6, -0.8, 0.0])

    def test_zero_row(self):
        assert component_color([0.0, 0.0, 0.0]) == (0, 0, 0)


class TestDominantColorName:

    @pytest.mark.parametrize("row,name", [
        ([0.9, 0.1, 0.1], "Red"),
        ([0.1, -0.9, 0.2], "Green"),
        ([0.0, 0.0, 1.0], "Blue"),
        ([-0.2, 0.1, -0.7], "Blue"),
    ])
    def test_largest_magnitude(self, row, name):
        assert dominant_color_name(row) == name

    def test_ties_go_to_blue(self):
        assert dominant_color_name([0.5, 0.5, 0.1]) == "Blue"
        assert dominant_color_name([0.0, 0.0, 0.0]) == "Blue"


class TestLabelColor:

    def test_light_colors_are_darkened(self):
        assert label_color((255, 255, 0)) == (178, 178, 0)

    def test_dark_colors_are_kept(self):
        assert label_color((0, 0, 255)) == (0, 0, 255)

    def test_custom_factor(self):
        assert label_color((255, 255, 255), darken_factor=0.5) == (127, 127, 127)


def test_hex_and_css():
    assert rgb_to_hex((255, 128, 0)) == "#ff8000"
    assert rgb_css((1, 2, 3)) == "rgb(1, 2, 3)"
