import sys

from vault_provider.cli import main

sys.exit(main())
