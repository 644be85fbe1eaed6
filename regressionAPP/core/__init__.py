"""Ядро: вибірка, SSE та похідні, правила оновлення, движок, критерії зупинки."""
