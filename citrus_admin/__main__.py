import sys

from citrus_admin.cli import main

sys.exit(main())
