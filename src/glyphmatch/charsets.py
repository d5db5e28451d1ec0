ASCII_PRINTABLE = "".join(chr(i) for i in range(32, 127))

ASCII_SYMBOLS = " .,:;!?@#$%&*+-=/<>()[]{}|\\\"'`~^_ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

# Block elements: U+2580-U+259F (fills, eighths, halves, quadrants, shades)
BLOCKS = " " + "".join(chr(i) for i in range(0x2580, 0x25A0))

# ASCII characters useful for texture and edges
TEXTURE_ASCII = " .,:;!'-/\\xX*+=#@"

CHARSETS = {
    "ascii": ASCII_PRINTABLE,
    "symbols": ASCII_SYMBOLS,
    "blocks": BLOCKS,
    "texture": TEXTURE_ASCII,
}
