"""
Color constants for fuzzalign plotting.
"""

# =============================================================================
# SYMBOL COLORS
# =============================================================================

# Tick label colors by symbol class
SYMBOL_COLORS = dict(
    match="#16946C",   # vivid teal green (symbol recorded in the alignment)
    other="#333333",   # near black
    gap_free="#9C440F",  # dark warm orange-brown (penalty override of 0)
)


# =============================================================================
# PATH COLORS
# =============================================================================

PATH_COLORS = dict(
    match="#2CA02C",     # green
    skip="#7F7F7F",      # gray
    best="#ffcc00",      # gold outline on the start cell
)

# =============================================================================
# HEATMAP COLORMAPS
# =============================================================================
HEATMAP_COLORMAPS = {
    'default': 'Reds',
    'sequential': 'Blues',
}
