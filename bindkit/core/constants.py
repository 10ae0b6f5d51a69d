"""
BindKit constants for Go declaration generation and coverage validation
"""

class GoTypes:
    """Go type spellings used by the type mapper"""

    OPTIONAL_STRING = "*string"
    OPTIONAL_BOOL = "*bool"
    OPTIONAL_INT = "*int"
    OPTIONAL_FLOAT = "*float64"
    STRING_SLICE = "[]string"
    STRING_MAP = "map[string]string"
    DYNAMIC_MAP = "map[string]interface{}"
    DYNAMIC = "interface{}"

    @classmethod
    def pointer_to(cls, type_name: str) -> str:
        """Nullable owning reference to a named Go type"""
        return f"*{type_name}"


class GenerationDefaults:
    """Default values for bindkit.config.json"""

    CONFIG_FILE = "bindkit.config.json"
    PACKAGE = "playwright"
    TARGET_LANGUAGE = "go"
    HANDLE_TYPE = "ElementHandle"
    SELECTOR_STYLE = "evaluate"
    OPTIONS_PREFIX = "option"
    INHERITANCE_KEY = "extends"
    COMMENT_WIDTH = 120


# Properties that are always emitted as float64 regardless of declared type
FLOAT_OVERRIDE_PROPERTIES = ("latitude", "longitude")

# Methods whose single object argument is spread into an options struct
METHODS_TO_SPREAD = [
    "Page.addScriptTag",
    "Page.addStyleTag",
    "Frame.addScriptTag",
    "Frame.addStyleTag",
    "Page.emulateMedia",
]

# Fenced code block tags treated as examples and stripped from doc comments
EXAMPLE_LANGUAGES = [
    "js",
    "ts",
    "javascript",
    "typescript",
    "python",
    "py",
    "java",
    "csharp",
    "sh",
    "bash",
    "html",
]

IGNORE_CLASSES = [
    "Android",
    "AndroidDevice",
    "AndroidInput",
    "AndroidWebView",
    "AndroidSocket",
    "Electron",
    "ElectronApplication",
    "Coverage",
    "Logger",
    "BrowserServer",
    "Accessibility",
    "TimeoutError",
    "Playwright",
    "RequestOptions",
    "WebSocketFrame",
    "FormData",
    "SnapshotAssertions",
    "GenericAssertions",
]

# Browser-engine specific classes never exposed by the binding
IGNORE_CLASS_PREFIXES = ["Chromium", "Firefox", "WebKit"]

ALLOWED_MISSING = [
    "BrowserType.LaunchServer",
    "Download.CreateReadStream",
    "BrowserContext.SetHTTPCredentials",
    "Page.FrameByUrl",
]

# Marker substitutions per selector style, applied in order
SELECTOR_MARKERS = {
    "evaluate": (
        ("$$eval", "EvaluateOnSelectorAll"),
        ("$eval", "EvaluateOnSelector"),
        ("$$", "querySelectorAll"),
        ("$", "querySelector"),
    ),
    "eval": (
        ("$$eval", "evalOnSelectorAll"),
        ("$eval", "evalOnSelector"),
        ("$$", "querySelectorAll"),
        ("$", "querySelector"),
    ),
}

ACRONYMS = (
    ("pdf", "PDF"),
    ("url", "URL"),
    ("json", "JSON"),
)
