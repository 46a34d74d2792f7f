class Debug:
    """
    Represents a debug visualization mode for the renderer.
    """
    MODES = ('normals', 'steps')

    def __init__(self, mode: str):
        """
        Initializes the debug mode object.

        Args:
            mode (str): The debug visualization to enable instead of matcap shading.
                        Supported options:
                        - 'normals': Colors hits by their surface normal.
                        - 'steps': Heatmap of sphere-tracing steps per pixel,
                                   misses included.
        """
        mode = mode.lower()
        if mode not in self.MODES:
            raise ValueError(f"Unknown debug mode '{mode}'. Expected one of {', '.join(self.MODES)}.")
        self.mode = mode

    def __repr__(self):
        return f"Debug('{self.mode}')"
