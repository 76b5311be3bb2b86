import logging
import os
import platform
import stat
from contextlib import contextmanager

from . import config

logger = logging.getLogger(__name__)

if platform.system() == "Windows":
    try:
        import win32api
        import win32con
        import win32file
        import win32security
        WINDOWS_SECURITY_AVAILABLE = True
    except ImportError:
        logger.warning("pywin32 not fully installed, cannot set Windows file permissions securely.")
        WINDOWS_SECURITY_AVAILABLE = False
else:
    WINDOWS_SECURITY_AVAILABLE = False


def _set_windows_file_permissions(filepath: str) -> bool:
    """
    Replace the DACL of a file with one granting access to the current user only.
    """
    if not WINDOWS_SECURITY_AVAILABLE:
        logger.warning(f"Skipping Windows file permission setting for {filepath}: pywin32 not available.")
        return False

    try:
        # SID of the account running the vault
        user_sid, _, _ = win32security.LookupAccountName(None, win32api.GetUserName())

        dacl = win32security.ACL()
        dacl.AddAccessAllowedAce(
            win32security.ACL_REVISION,
            win32con.GENERIC_READ | win32con.GENERIC_WRITE,
            user_sid
        )

        # WRITE_DAC is the only access needed to replace the DACL
        handle = win32file.CreateFile(
            filepath,
            win32con.WRITE_DAC,
            win32file.FILE_SHARE_READ | win32file.FILE_SHARE_WRITE | win32file.FILE_SHARE_DELETE,
            None,
            win32con.OPEN_EXISTING,
            win32con.FILE_ATTRIBUTE_NORMAL,
            None
        )
        try:
            win32security.SetSecurityInfo(
                handle,
                win32security.SE_FILE_OBJECT,
                win32security.DACL_SECURITY_INFORMATION | win32security.PROTECTED_DACL_SECURITY_INFORMATION,
                None,
                None,
                dacl,
                None
            )
        finally:
            win32file.CloseHandle(handle)
    except win32api.error as e:
        logger.error(f"Failed to set Windows file permissions for {filepath}: {e}")
        return False
    return True


def set_owner_only_permissions(filepath: str) -> bool:
    """Make a file readable/writable by its owner only."""
    if platform.system() == 'Windows':
        return _set_windows_file_permissions(filepath)
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600
    except OSError as e:
        logger.error(f"Failed to set permissions for {filepath}: {e}")
        return False
    return True


@contextmanager
def atomic_write(filepath: str, mode: str = 'w', encoding: str = 'utf-8'):
    """
    Write to a temporary sibling of ``filepath`` and move it into place on success.

    The destination is only replaced once the body of the ``with`` block has
    finished and the data is flushed to disk. On any error the temporary file
    is removed and the previous destination is left untouched.
    """
    tmp_path = filepath + config.TEMP_SUFFIX
    directory = os.path.dirname(os.path.abspath(filepath))
    os.makedirs(directory, exist_ok=True)

    kwargs = {} if 'b' in mode else {'encoding': encoding}
    try:
        with open(tmp_path, mode, **kwargs) as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        set_owner_only_permissions(tmp_path)
        os.replace(tmp_path, filepath)
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {tmp_path}: {e}")
