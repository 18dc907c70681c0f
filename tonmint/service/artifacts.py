import base64
import binascii
import json
import logging
import os
import typing

from ..boc import Cell
from ..contract import CodeNotFoundError, load_code_cell


logger = logging.getLogger('artifacts')


def read_artifact(path: str) -> bytes:
    """
    Artifact contract:
        *.json - object with exactly one of "hex" (hex bag of cells) or "codeBoc" (base64 bag of cells)
        anything else - raw bag of cells bytes
    :return: serialized bag of cells
    """
    try:
        with open(path, 'rb') as f:
            raw = f.read()
    except OSError as e:
        raise CodeNotFoundError(f'can not read {path}: {e}') from e
    if not path.lower().endswith('.json'):
        return raw
    try:
        artifact = json.loads(raw)
    except ValueError as e:
        raise CodeNotFoundError(f'{path} is not a valid json: {e}') from e
    if not isinstance(artifact, dict):
        raise CodeNotFoundError(f'{path} must contain a json object')
    keys = [k for k in ('hex', 'codeBoc') if k in artifact]
    if len(keys) != 1:
        raise CodeNotFoundError(f'{path} must contain exactly one of "hex", "codeBoc" keys, found: {keys}')
    value = artifact[keys[0]]
    if not isinstance(value, str):
        raise CodeNotFoundError(f'{path}: "{keys[0]}" must be a string')
    try:
        if keys[0] == 'hex':
            return bytes.fromhex(value)
        return base64.b64decode(value, validate=True)
    except (ValueError, binascii.Error) as e:
        raise CodeNotFoundError(f'{path}: "{keys[0]}" can not be decoded: {e}') from e


def find_artifact(candidates: typing.Iterable[str]) -> str:
    candidates = list(candidates)
    for path in candidates:
        if os.path.isfile(path):
            return path
    raise CodeNotFoundError(f'no wallet code artifact found, tried: {candidates}')


def load_wallet_code(candidates: typing.Iterable[str]) -> Cell:
    """
    The first existing candidate is the artifact. If it can not be decoded, other candidates are not tried.
    """
    path = find_artifact(candidates)
    cell = load_code_cell(read_artifact(path))
    logger.info(f'Loaded wallet code cell from {path}')
    return cell
