"""
Base Generator Class
====================
Abstract base class for output file generators.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import logging

from ..data.gtfs_loader import GTFSLoader
from ..config import OUTPUT_DIR

logger = logging.getLogger(__name__)


class BaseGenerator(ABC):
    """
    Abstract base class for generators.

    All generators should inherit from this class and implement
    the generate() method.
    """

    # Default output filename (override in subclasses)
    output_filename = "output.html"

    def __init__(self, loader: Optional[GTFSLoader] = None, output_dir: Optional[Path] = None):
        """
        Initialize the generator.

        Args:
            loader: GTFSLoader instance. If None, a new one is created.
            output_dir: Directory for save(). Defaults to the project's outputs/.
        """
        self.loader = loader or GTFSLoader()
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR

    @abstractmethod
    def generate(self) -> str:
        """
        Generate the file content.

        Must be implemented by subclasses.

        Returns:
            Complete content as a string.
        """
        raise NotImplementedError("Subclasses must implement generate()")

    def save(self, output_path: Optional[Path] = None) -> Path:
        """
        Generate and save content to file.

        Args:
            output_path: Path to save the file. If None, uses default location.

        Returns:
            Path to the saved file.
        """
        if output_path is None:
            output_path = self.output_dir / self.output_filename
        else:
            output_path = Path(output_path)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Generating {output_path.name}...")
        content = self.generate()

        logger.info(f"Saving to {output_path}")
        output_path.write_text(content, encoding='utf-8')

        file_size = output_path.stat().st_size / 1024  # KB
        logger.info(f"Saved {output_path.name} ({file_size:.1f} KB)")

        return output_path

    def _log_progress(self, message: str) -> None:
        """Log a progress message."""
        print(f"  {message}")
        logger.info(message)
