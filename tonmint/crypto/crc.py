import fastcrc


def crc16(data: bytes) -> bytes:
    """
    CRC-16/XMODEM, used in user-friendly addresses, big endian
    """
    return fastcrc.crc16.xmodem(data).to_bytes(2, 'big')


def crc32c(data: bytes) -> bytes:
    """
    CRC-32C (iSCSI), used in bag of cells, little endian
    """
    return fastcrc.crc32.iscsi(data).to_bytes(4, 'little')
