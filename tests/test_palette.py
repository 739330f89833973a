import numpy as np

from mandelview.renderers.palette import (
    BandedColorMap,
    GreenColorMap,
    SineColorMap,
    pack_rgb,
    unpack_rgb,
)

def test_green_places_count_in_green_channel():
    cm = GreenColorMap()
    assert cm.color_of(0) == 0
    assert cm.color_of(1) == 0x100
    assert cm.color_of(255) == 0xFF00
    assert cm.color_of(256) == 256 << 8

def test_green_vectorized_dtype():
    out = GreenColorMap()(np.array([[0, 3], [7, 256]], dtype=np.int32))
    assert out.dtype == np.uint32
    assert out.tolist() == [[0, 0x300], [0x700, 0x10000]]

def test_banded_interleaves_low_bits():
    cm = BandedColorMap()
    assert cm.color_of(0b0000101) == 0b101
    assert cm.color_of(0b0011000) == 0b011 << 11
    assert cm.color_of(0b1000000) == 0x400000
    # bit 5 sits in both the green and red masks
    assert cm.color_of(0b1100000) == (0x20 << 8) | (0x60 << 16)
    # fractional counts use the integer part
    assert cm.color_of(5.9) == cm.color_of(5)

def test_sine_inside_is_black_and_outside_is_not_uniform():
    cm = SineColorMap(max_iterations=256)
    assert cm.color_of(256) == 0
    colors = cm(np.linspace(0.0, 255.0, 50))
    assert colors.dtype == np.uint32
    assert np.all(colors <= 0xFFFFFF)
    assert len(np.unique(colors)) > 10

def test_pack_unpack():
    packed = pack_rgb(np.array([1, 255]), np.array([2, 0]), np.array([3, 128]))
    assert packed.tolist() == [0x010203, 0xFF0080]
    assert unpack_rgb(packed).tolist() == [[1, 2, 3], [255, 0, 128]]
