"""Константы приложения.

Настройки не редактируются пользователем и не сохраняются на диск:
всё состояние живёт только в памяти процесса.
"""
from __future__ import annotations

# Window
WINDOW_TITLE = "FinalPic"
WINDOW_MIN_SIZE = (700, 800)

# Scale (1.0 = без масштабирования)
SCALE_MIN = 0.1
SCALE_MAX = 5.0
SCALE_DEFAULT = 1.0
SCALE_STEP = 0.1
WHEEL_ZOOM_FACTOR = 1.1

# Filters
INTENSITY_DEFAULT = 0.5
SEPIA_TINT = (1.0, 0.8, 0.6)
BLUR_MAX_RADIUS = 10.0

# Export
JPEG_QUALITY = 80  # 0.8 от максимального качества
DEFAULT_EXPORT_NAME = "edited_image.png"
EXPORT_FILETYPES = (
    ("PNG", "*.png"),
    ("JPEG", "*.jpg *.jpeg"),
)

# Open dialog
OPEN_FILETYPES = (
    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
    ("All files", "*.*"),
)

# Worker results are polled from the Tk loop
TASK_POLL_MS = 30
