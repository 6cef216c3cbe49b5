"""huffproc: lossless Huffman compressor with a self-describing tree header."""

from loguru import logger

# Library default: silent. huffproc.log.configure_logging() turns it back on.
logger.disable("huffproc")
