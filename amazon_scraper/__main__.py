import sys

from amazon_scraper.cli import main

sys.exit(main())
