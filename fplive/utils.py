"""Reading and writing the JSON payloads the scorer consumes and produces."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

PayloadModel = TypeVar('PayloadModel', bound=BaseModel)
logger = logging.getLogger('fplive.utils')


def parse_payload(data: Any, schema: type[PayloadModel], source: str = 'payload') -> PayloadModel:
    """
    Validate decoded FPL JSON against one of the payload schemas.

    Args:
        data: Decoded JSON (dict or list)
        schema: Schema class from fplive.schemas
        source: Where the payload came from, for messages (file path, endpoint)

    Raises:
        ValueError: If the payload doesn't match the schema
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{source} does not match {schema.__name__}: {e.error_count()} error(s)')
        raise ValueError(f'{source} does not match {schema.__name__}:\n{e}') from e


def read_payload_file(
    path: Path | str,
    schema: Optional[type[PayloadModel]] = None,
) -> Any:
    """
    Read a saved payload file, validating it when a schema is given.

    Args:
        path: JSON file (e.g. a saved ``event/{gw}/live/`` response)
        schema: Schema class to validate against, or None for raw JSON

    Returns:
        The schema instance, or the decoded JSON when no schema is given

    Raises:
        FileNotFoundError: If the file is missing
        json.JSONDecodeError: If the file isn't valid JSON
        ValueError: If the payload doesn't match the schema

    Example:
        from fplive.schemas import LiveEventResponse
        live = read_payload_file('data/gw_12/live.json', LiveEventResponse)
    """
    path = Path(path)
    if not path.is_file():
        logger.error(f'Payload file missing: {path}')
        raise FileNotFoundError(f'Payload file missing: {path}')

    logger.debug(f'Reading payload {path}')
    text = path.read_text(encoding='utf-8')
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f'{path} is not valid JSON (line {e.lineno}, column {e.colno}): {e.msg}')
        raise

    if schema is None:
        return data
    return parse_payload(data, schema, str(path))


def write_json(path: Path | str, data: Any, indent: int = 2) -> Path:
    """
    Write results as JSON, creating the output directory first.

    Schema instances are dumped with model_dump().

    Returns:
        The path written

    Raises:
        TypeError: If data holds values JSON can't encode
        OSError: If the file can't be written
    """
    path = Path(path)
    if isinstance(data, BaseModel):
        data = data.model_dump()

    try:
        text = json.dumps(data, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Cannot encode results for {path}: {e}')
        raise

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + '\n', encoding='utf-8')
    logger.debug(f'Wrote {path}')
    return path
