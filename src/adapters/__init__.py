"""Integration adapters: listing scraper, Telegram notifiers and clock."""
