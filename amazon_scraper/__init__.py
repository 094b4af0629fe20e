"""Amazon product scraper: resilient product and review extraction."""
