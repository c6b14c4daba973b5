import re

from PIL import Image

from core.palette.colors import hex_to_rgb, normalize_hex, rgb_to_hex
from core.palette.mood import infer_mood_keywords
from core.palette.quantizer import _downscale, extract_dominant_palette

HEX = re.compile(r"^#[0-9a-f]{6}$")


def stripes(widths_and_colors, height=10):
    width = sum(w for w, _ in widths_and_colors)
    image = Image.new("RGB", (width, height))
    x = 0
    for w, color in widths_and_colors:
        image.paste(color, (x, 0, x + w, height))
        x += w
    return image


def test_solid_color_lands_in_its_bucket():
    palette = extract_dominant_palette([Image.new("RGB", (10, 10), "#3366cc")], 5)

    assert palette == ["#3868c8"]
    for got, want in zip(hex_to_rgb(palette[0]), (0x33, 0x66, 0xCC)):
        assert abs(got - want) <= 8


def test_palette_is_ordered_by_frequency():
    image = stripes([(60, (255, 0, 0)), (30, (0, 0, 255))])

    assert extract_dominant_palette([image], 5) == ["#f80808", "#0808f8"]


def test_histogram_is_combined_across_images():
    red = Image.new("RGB", (30, 10), (255, 0, 0))
    blue = Image.new("RGB", (90, 10), (0, 0, 255))

    assert extract_dominant_palette([red, blue], 5) == ["#0808f8", "#f80808"]


def test_count_caps_palette_and_entries_are_unique_lowercase_hex():
    colors = [(i * 16, 255 - i * 16, (i * 40) % 256) for i in range(12)]
    image = stripes([(12 - i, color) for i, color in enumerate(colors)] * 3)

    palette = extract_dominant_palette([image], 5)

    assert len(palette) == 5
    assert len(set(palette)) == 5
    assert all(HEX.match(color) for color in palette)


def test_transparent_pixels_are_ignored():
    image = Image.new("RGBA", (30, 10), (255, 0, 0, 100))
    image.paste((0, 255, 0, 255), (0, 0, 15, 10))

    assert extract_dominant_palette([image], 5) == ["#08f808"]
    assert extract_dominant_palette([Image.new("RGBA", (10, 10), (0, 0, 0, 0))], 5) == []


def test_non_positive_count_and_no_images():
    image = Image.new("RGB", (4, 4), "white")

    assert extract_dominant_palette([image], 0) == []
    assert extract_dominant_palette([], 5) == []


def test_downscale_limits_longer_side():
    assert _downscale(Image.new("RGB", (400, 200))).size == (96, 48)
    assert _downscale(Image.new("RGB", (1000, 5))).size == (96, 1)
    assert _downscale(Image.new("RGB", (50, 20))).size == (50, 20)


def test_mood_defaults_for_empty_palette():
    assert infer_mood_keywords([]) == ["balanced", "clean", "modern"]
    assert infer_mood_keywords(["not-a-color"]) == ["balanced", "clean", "modern"]


def test_mood_brightness_and_chroma_tags():
    assert infer_mood_keywords(["#000000"]) == ["moody", "muted", "stylized"]
    assert infer_mood_keywords(["#ffffff"]) == ["airy", "muted", "stylized"]
    assert infer_mood_keywords(["#808080"]) == ["balanced", "muted", "stylized"]
    assert infer_mood_keywords(["#ff0000"]) == ["moody", "vibrant", "stylized"]


def test_mood_averages_the_palette():
    # Black and white average to mid grey.
    assert infer_mood_keywords(["#000000", "#ffffff"]) == ["balanced", "muted", "stylized"]
    assert len(infer_mood_keywords(["#112233", "#445566", "#778899", "#aabbcc"])) == 3


def test_normalize_hex():
    assert normalize_hex("#AABBCC") == "#aabbcc"
    assert normalize_hex("0x112233") == "#112233"
    assert normalize_hex("  ffeedd ") == "#ffeedd"
    assert normalize_hex("zzzzzz") is None
    assert normalize_hex("#fff") is None
    assert normalize_hex(123456) is None


def test_rgb_to_hex_clamps():
    assert rgb_to_hex(300, -5, 127.5) == "#ff0080"
