import sys

from product_catalog.cli import main

sys.exit(main())
