DEBUG_APP_EXCEPTION = False

# Name of the preset used when a form is built without an explicit preset
DEFAULT_PRESET = "default"

# Additional YAML preset files, merged over the bundled presets in order
PRESET_FILES = []

# Request fields reserved by the form runtime
FORM_STATE_FIELD = "__state"
CURRENT_PAGE_FIELD = "__currentPage"

# Extra template directories searched before the bundled templates
TEMPLATE_SEARCH_PATHS = []
