"""Standard exit codes for the trf-hos-finder CLI.

Following shell conventions:
- 0: Success
- 1: General/business logic error
- 2: Command line usage error
- 130: Terminated by SIGINT (128 + 2)
"""

EXIT_SUCCESS = 0
EXIT_ERROR = 1  # General/business logic error
EXIT_USAGE = 2  # Command line usage error
EXIT_SIGINT = 130  # 128 + SIGINT(2)
