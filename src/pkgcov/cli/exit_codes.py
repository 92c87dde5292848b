# mirror <sysexits.h>
EXIT_OK = 0  # Normal success
EXIT_GENERIC = 1  # Generic failure (fallback)
EXIT_THRESHOLD = 2  # At least one package below the minimum coverage
EXIT_DATAERR = 65  # Input data was invalid (e.g., malformed profile line)
EXIT_NOINPUT = 66  # Input file not found (e.g., profile.cov missing)
EXIT_IOERR = 74  # Profile exists but could not be read
EXIT_CONFIG = 78  # Invalid configuration (e.g., threshold out of range)
