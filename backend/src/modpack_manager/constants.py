ARCHIVE_EXTENSIONS = (".jar", ".zip")

KNOWN_LOADERS = ("neoforge", "forge", "fabric", "quilt")

# Short codes seen in the wild, mapped to the canonical loader name
LOADER_ALIASES: dict[str, str] = {
    "neoforge": "neoforge",
    "neoforged": "neoforge",
    "neo": "neoforge",
    "nf": "neoforge",
    "forge": "forge",
    "mcforge": "forge",
    "fabric": "fabric",
    "fabricmc": "fabric",
    "quilt": "quilt",
    "quiltmc": "quilt",
}

FILLER_WORDS = frozenset({"for", "mc", "minecraft"})

PRERELEASE_MARKERS = ("beta",)
# Only recognised as a separate token: "-rc1" but not "Sorcery"
PRERELEASE_TOKENS = ("alpha", "rc", "pre")

# Lowercased name prefix -> canonical short name
NAME_OVERRIDES: dict[str, str] = {
    "yet-another-config-lib": "YACL",
    "yetanotherconfiglib": "YACL",
    "architectury-api": "architectury",
    "xaeros-world-map": "XaerosWorldMap",
}

REPORT_SEPARATOR = "─────────────────────────────"
LATEST_SNAPSHOT_FILE = "latest_snapshot.json"
REPORT_SUFFIX = ".txt"
