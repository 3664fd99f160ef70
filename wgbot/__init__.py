"""Telegram bot for a shared flat: cleaning rotation and shared expenses."""
