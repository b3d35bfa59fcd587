"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Optional, Union
import logging
import aiofiles


class FileValidator:
    """
    Validates files before upload.
    
    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Empty files are accepted; they are uploaded as a single empty
        chunk.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated Path, file size in bytes)
            
        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path)
        
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        
        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")
        
        return path, path.stat().st_size


class AsyncFileReader:
    """
    Asynchronous byte-range reader.
    
    Uses aiofiles for non-blocking I/O. The handle can be kept open for
    the duration of an upload with open_file()/close_file().
    """
    
    def __init__(self):
        """Initialize file reader."""
        self._logger = logging.getLogger('videouploader.upload.file')
        self._file_handle = None
        self._current_file_path: Optional[Path] = None
    
    async def open_file(self, file_path: Path) -> None:
        """
        Open file for reading. Call this before reading chunks.
        
        Args:
            file_path: Path to the file to open
        """
        if self._file_handle is not None and self._current_file_path == file_path:
            return
        
        if self._file_handle is not None:
            await self.close_file()
        
        self._file_handle = await aiofiles.open(file_path, 'rb')
        self._current_file_path = file_path
    
    async def close_file(self) -> None:
        """Close the currently open file."""
        if self._file_handle is not None:
            await self._file_handle.close()
            self._file_handle = None
            self._current_file_path = None
    
    async def read_chunk(self, file_path: Path, start: int, end: int) -> bytes:
        """
        Read bytes [start, end) of a file.
        
        Reuses the open handle when file_path is the open file,
        otherwise opens and closes the file around the read.
        
        Returns:
            Chunk data (empty for an empty range)
            
        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is shorter than end
        """
        chunk_size = end - start
        if chunk_size == 0:
            return b''
        
        if self._file_handle is not None and self._current_file_path == file_path:
            await self._file_handle.seek(start)
            data = await self._file_handle.read(chunk_size)
        else:
            async with aiofiles.open(file_path, 'rb') as f:
                await f.seek(start)
                data = await f.read(chunk_size)
        
        if len(data) != chunk_size:
            raise ValueError(
                f"Short read at {start}-{end}: got {len(data)} bytes, file changed during upload?"
            )
        
        self._logger.debug(f"Read chunk: {start}-{end} ({len(data)} bytes)")
        return data
