# chip8_tracer/transport/framebuffer.py
"""
Transport Layer (フレームバッファ)

64x32のモノクロ画素グリッドを保持します。
画素の変更はスプライト描画（XOR）と画面クリアのみが行います。
"""
from typing import List, Sequence

# @intent:constant CHIP-8の表示解像度。
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:responsibility 2値画素のグリッドと、XORスプライト描画・クリア操作を提供します。
class Framebuffer:
    """
    モノクロのフレームバッファ。
    ホストは get_pixel / rows で内容を参照するのみで、変更はCPU側の命令が行います。
    """
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("Framebuffer dimensions must be positive.")
        self._width = width
        self._height = height
        self._pixels = bytearray(width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # @intent:responsibility 全画素を消去します。
    def clear(self) -> None:
        for i in range(len(self._pixels)):
            self._pixels[i] = 0

    # @intent:responsibility スプライトをXORで描画し、衝突（既に点灯していた画素の消灯）の有無を返します。
    # @intent:pre-condition spriteの各要素は8bit値（最上位ビットが左端）です。
    def draw_sprite(self, x: int, y: int, sprite: Sequence[int]) -> bool:
        """
        (x, y) を左上として、各行8ピクセル幅のスプライトを描画します。
        画面端では反対側に折り返します。
        """
        collision = False
        for row, bits in enumerate(sprite):
            py = (y + row) % self._height
            for col in range(8):
                if bits & (0x80 >> col) == 0:
                    continue
                px = (x + col) % self._width
                index = py * self._width + px
                if self._pixels[index]:
                    collision = True
                self._pixels[index] ^= 1
        return collision

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self._width}x{self._height} framebuffer.")
        return self._pixels[y * self._width + x] == 1

    # @intent:responsibility 描画用に、行ごとの画素状態を返します。
    def rows(self) -> List[List[bool]]:
        w = self._width
        return [[p == 1 for p in self._pixels[y * w:(y + 1) * w]] for y in range(self._height)]

    def is_blank(self) -> bool:
        return not any(self._pixels)

    def lit_count(self) -> int:
        return sum(self._pixels)
