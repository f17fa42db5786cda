"""Image generation adapter package.

Scope:
    Provides the Gemini image client and the inline-data extraction service used
    by the wallpaper cycle.

Non-goals:
    - No file output; host surfaces decide what to do with decoded bytes.
    - No image post-processing; visual adjustments are declarative and applied
      by `gemini_wallpaper.display.renderer`.
"""
