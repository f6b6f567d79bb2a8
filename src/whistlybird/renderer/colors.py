"""Color palette."""

# RGB tuples
SKY = (112, 197, 206)
PIPE = (92, 184, 92)
BIRD = (52, 152, 219)
BIRD_LOCKED = (255, 215, 0)
GRID_LINE = (0, 0, 0, 77)
GRID_LABEL = (40, 40, 40)
LABEL_BG = (255, 255, 255, 230)
LABEL_TEXT = (0, 0, 0)
HUD_TEXT = (255, 255, 255)
HUD_SHADOW = (30, 30, 30)
OVERLAY = (0, 0, 0, 160)
PANEL_BG = (24, 28, 40, 230)
PANEL_TEXT = (220, 220, 220)
PANEL_SELECTED = (255, 215, 0)
ERROR_TEXT = (230, 80, 80)
TITLE = (255, 215, 0)
