import sys

from larifriqiya.cli import main

sys.exit(main())
