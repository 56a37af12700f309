"""Low-level terminal key reading, cursor control, line erasing and text width helpers."""