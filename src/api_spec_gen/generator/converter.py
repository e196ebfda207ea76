"""Runs the external TypeScript-to-OpenAPI converter.

The converter reads the combined type source from a scratch directory
and writes an OpenAPI JSON file next to it; only its
``components.schemas`` table is used.
"""

import json
import logging
import shutil
import subprocess
from pathlib import Path

from api_spec_gen.config import GeneratorConfig
from api_spec_gen.errors import ConverterError

logger = logging.getLogger(__name__)


def prepare_work_dir(work_dir: Path) -> Path:
    """Remove the scratch directory if present and create it again."""
    if work_dir.exists():
        shutil.rmtree(work_dir)
    work_dir.mkdir(parents=True)
    return work_dir


def run_converter(work_dir: Path, config: GeneratorConfig) -> None:
    """Invoke the converter synchronously inside the scratch directory."""
    args = config.converter_args()
    logger.info("Running converter: %s", " ".join(args))
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            cwd=work_dir,
        )
    except FileNotFoundError as e:
        raise ConverterError(f"Converter executable not found: {args[0]}") from e

    if result.returncode != 0:
        raise ConverterError(
            f"Converter exited with status {result.returncode}",
            stderr=result.stderr or result.stdout,
        )


def extract_schemas(combined_source: str, config: GeneratorConfig) -> dict:
    """Convert the combined type source and return its name -> schema table."""
    work_dir = prepare_work_dir(config.work_dir)
    (work_dir / config.source_name).write_text(combined_source, encoding="utf-8")

    run_converter(work_dir, config)

    output = work_dir / config.output_name
    if not output.exists():
        raise ConverterError(f"Converter did not produce {output}")

    doc = json.loads(output.read_text(encoding="utf-8"))
    try:
        schemas = doc["components"]["schemas"]
    except (KeyError, TypeError) as e:
        raise ConverterError(f"{output} has no components.schemas") from e

    logger.info("Converter produced %d schemas", len(schemas))
    return schemas
