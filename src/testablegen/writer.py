from pathlib import Path


def write_sources(output_dir: Path, sources: dict[str, str]):
    """Write expanded sources under `output_dir`, yielding each written path.

    Keys are file names relative to `output_dir`; parent directories are created as needed.
    """
    for relative_name, code in sources.items():
        file_path = output_dir / relative_name

        # Create parent directories
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_path.write_text(code)
        yield file_path
