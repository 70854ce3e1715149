"""
Artifact Output

Saves compiled artifacts to disk.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from resumetyp.contexts.rendering.logger import _log_debug, _log_info
from resumetyp.contexts.templating.defaults import DEFAULT_OUTPUT_FILENAME
from resumetyp.utils.timestamp import today

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


def download_artifact(
    data: Union[bytes, str],
    filename: str = DEFAULT_OUTPUT_FILENAME,
    output_dir: Optional[Path] = None,
) -> Path:
    """
    Save an artifact as a file.

    The payload goes to a temporary file in the destination directory, which
    is closed and moved into place before returning. The temporary file never
    outlives the call, even when writing fails.

    Args:
        data: PDF bytes or SVG text
        filename: Target file name (directory parts are ignored)
        output_dir: Destination directory (default: RESULTS_PATH/YYYY-MM-DD)

    Returns:
        Path to the saved file
    """
    output_dir = Path(output_dir) if output_dir is not None else RESULTS_PATH / today()
    output_dir.mkdir(parents=True, exist_ok=True)

    target = output_dir / (Path(filename).name or DEFAULT_OUTPUT_FILENAME)
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=output_dir, prefix=f".{target.name}.", suffix=".part", delete=False
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(payload)
        os.replace(tmp_path, target)
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
            _log_debug(f"Removed partial file {tmp_path}")

    _log_info(f"Saved {len(payload)} bytes to {target}")
    return target
