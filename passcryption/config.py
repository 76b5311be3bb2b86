"""
Configuration constants for the Passcryption vault core.
"""

import string

# Application Metadata
APP_VERSION = "1.0.0"  # Use: Current version of the vault core. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "Passcryption"  # Use: Human readable name of the application. Type: str. Range: Any valid string.

# Key Derivation Settings
KEY_LABEL = "passcryption"  # Use: Fixed application label mixed into the machine identifier before hashing. Type: str. Range: Any non-empty string. Changing it makes existing vaults unreadable.
KEY_SIZE = 32  # Use: Size of the derived encryption key in bytes. Corresponds to AES-256 and the SHA-256 digest size. Type: int. Range: 32 bytes.

# Cipher Settings
NONCE_SIZE = 12  # Use: Size of the AES-GCM nonce in bytes, freshly drawn for every encryption. Type: int. Range: 12 bytes (96 bits) is the recommended size for GCM.
TAG_SIZE = 16  # Use: Size of the AES-GCM authentication tag in bytes. Type: int. Range: 16 bytes (128 bits).
VAULT_MAGIC = b'PCV1'  # Use: Magic bytes at the start of every encrypted envelope, also bound as associated data. Type: bytes. Range: Exactly 4 bytes.

# File and Directory Names
DATA_DIR_NAME = ".passcryption"  # Use: Name of the hidden directory within the user's home directory holding the vault and settings. Type: str. Range: Any valid directory name.
DATA_DIR_ENV_VAR = "PASSCRYPTION_HOME"  # Use: Environment variable that overrides the data directory location. Type: str. Range: Any valid environment variable name.
VAULT_FILE = "passwords.enc"  # Use: Filename for the encrypted credential vault. Type: str. Range: Any valid filename.
SETTINGS_FILE = "settings.json"  # Use: Filename for the plain JSON settings document. Type: str. Range: Any valid filename.
CORRUPT_SUFFIX = ".corrupt"  # Use: Suffix appended to the vault path when an unreadable vault is set aside before it can be overwritten. Type: str. Range: Any valid filename suffix.
TEMP_SUFFIX = ".tmp"  # Use: Suffix of the temporary file written before atomically replacing a destination file. Type: str. Range: Any valid filename suffix.

# Settings Defaults
THEMES = ("dark", "light", "system")  # Use: Accepted values of the "theme" setting. Type: tuple[str]. Range: Non-empty tuple of strings.
DEFAULT_THEME = "dark"  # Use: Theme used when the settings file is missing or holds an unknown theme. Type: str. Range: One of THEMES.
CLIPBOARD_CLEAR_TIME_DEFAULT_SECONDS = 30  # Use: Default delay in seconds before a copied value is cleared from the clipboard. Type: int. Range: 0 (never clear) or a positive integer.
DEFAULT_SETTINGS = {  # Use: Settings document returned when no valid settings file exists. Type: dict[str, Any]. Range: Keys "theme" and "clipboardClearTime".
    "theme": DEFAULT_THEME,
    "clipboardClearTime": CLIPBOARD_CLEAR_TIME_DEFAULT_SECONDS,
}

# Password Generator Settings
PASSWORD_GENERATOR_DEFAULT_LENGTH = 16  # Use: Default length for generated passwords. Type: int. Range: Positive integer.
PASSWORD_GENERATOR_DEFAULT_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"  # Use: Default symbol alphabet offered to the generator. Type: str. Range: Any string; empty disables symbols.
LOWERCASE_CHARS = string.ascii_lowercase  # Use: Lowercase category alphabet. Type: str. Range: "a" to "z".
UPPERCASE_CHARS = string.ascii_uppercase  # Use: Uppercase category alphabet. Type: str. Range: "A" to "Z".
DIGIT_CHARS = string.digits  # Use: Digit category alphabet. Type: str. Range: "0" to "9".
FALLBACK_CHARSET = LOWERCASE_CHARS + UPPERCASE_CHARS + DIGIT_CHARS  # Use: Charset used when every category is disabled. Type: str. Range: Full alphanumeric set.

# Logging Settings
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'  # Use: Format string passed to logging.basicConfig by the command line. Type: str. Range: Any valid logging format string.
