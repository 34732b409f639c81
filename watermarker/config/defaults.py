"""Default configuration values for watermarker."""

# Default configuration dictionary
DEFAULT_CONFIG = {
    # Identity used for the copyright fallback and the copyright rewrite
    "owner": {
        "first_name": "Lasse",
        "last_name": "Karlsen",
        "full_name": "Lasse Vågsæther Karlsen",
        "software": "LVK Watermarker",
    },
    
    # Camera/lens display names, keyed by the name found in the metadata,
    # e.g. "Canon EOS R5": "Canon R5"
    "replacements": {},
    
    # Banner rendering
    "banner": {
        "font_family": "Arial",
        "font_path": "",
        "blur_radius": 50,
        "brightness": 0.5,
    },
    
    # JPEG output
    "output": {
        "quality": 85,
    },
    
    # Batch behaviour
    "processing": {
        "continue_on_error": False,
        "delete_original": True,
    },
    
    # Logging Configuration
    "logging": {
        "level": "WARNING",
        "file": "",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}
