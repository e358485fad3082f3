"""GridForge — grid placement and auto-packing for inventory screens."""
