"""
Static lookup tables for language and technology inference.
"""

# ============================================================================
# LANGUAGES - file extension (lower-case, with dot) -> display name
# ============================================================================

EXTENSION_LANGUAGE_MAP: dict[str, str] = {
    # General-purpose languages
    ".js": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".ts": "TypeScript",
    ".py": "Python",
    ".java": "Java",
    ".cpp": "C++",
    ".cc": "C++",
    ".hpp": "C++",
    ".c": "C",
    ".h": "C",
    ".cs": "C#",
    ".php": "PHP",
    ".rb": "Ruby",
    ".go": "Go",
    ".rs": "Rust",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".scala": "Scala",
    ".dart": "Dart",
    # Markup / style
    ".html": "HTML",
    ".htm": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".sass": "Sass",
    ".less": "Less",
    ".vue": "Vue.js",
    ".jsx": "React",
    ".tsx": "React TypeScript",
    ".md": "Markdown",
    # Data / config
    ".json": "JSON",
    ".xml": "XML",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".toml": "TOML",
    ".sql": "SQL",
    # Shell / containers
    ".sh": "Shell Script",
    ".bash": "Shell Script",
    ".zsh": "Shell Script",
    ".ps1": "PowerShell",
    ".dockerfile": "Docker",
}

# Extension-less files recognised by their (lower-case) name.
FILENAME_LANGUAGE_MAP: dict[str, str] = {
    "dockerfile": "Docker",
    "makefile": "Makefile",
}

# ============================================================================
# FRAMEWORKS / DATABASES - keyword (lower-case) -> canonical display name
# ============================================================================

FRAMEWORK_KEYWORDS: dict[str, str] = {
    "react": "React",
    "vue": "Vue.js",
    "angular": "Angular",
    "express": "Express.js",
    "next": "Next.js",
    "nuxt": "Nuxt.js",
    "svelte": "Svelte",
    "django": "Django",
    "flask": "Flask",
    "fastapi": "FastAPI",
    "spring": "Spring",
    "laravel": "Laravel",
    "rails": "Ruby on Rails",
}

DATABASE_KEYWORDS: dict[str, str] = {
    "mongodb": "MongoDB",
    "mongoose": "MongoDB",
    "pg": "PostgreSQL",
    "postgres": "PostgreSQL",
    "psycopg": "PostgreSQL",
    "mysql": "MySQL",
    "sqlite3": "SQLite",
    "sqlite": "SQLite",
    "redis": "Redis",
    "elasticsearch": "Elasticsearch",
}

# ============================================================================
# README TECHNOLOGIES - display names searched in README text
# ============================================================================

README_TECH_KEYWORDS: list[str] = [
    "React", "Vue", "Angular", "Node.js", "Express", "TypeScript", "JavaScript",
    "Python", "Django", "Flask", "FastAPI", "Java", "Spring", "C#", ".NET", "PHP",
    "Laravel", "Ruby", "Rails", "Golang", "Rust", "Swift", "Kotlin", "Scala", "C++",
    "HTML", "CSS", "SCSS", "Sass", "Bootstrap", "Tailwind", "Material-UI",
    "MongoDB", "PostgreSQL", "MySQL", "SQLite", "Redis", "Elasticsearch",
    "Docker", "Kubernetes", "AWS", "Azure", "GCP", "Heroku", "Vercel", "Netlify",
    "Git", "GitHub", "GitLab", "Jenkins", "Travis CI", "CircleCI",
    "Webpack", "Vite", "Rollup", "Babel", "ESLint", "Prettier",
    "Jest", "Mocha", "Cypress", "Selenium", "Puppeteer",
    "GraphQL", "REST API", "WebSocket", "gRPC",
    "Machine Learning", "TensorFlow", "PyTorch", "Scikit-learn",
    "Blockchain", "Ethereum", "Solidity", "Web3",
]  # fmt: skip

# Longer words that contain a keyword but name something else. Occurrences are
# blanked out before the containment check for that keyword.
KEYWORD_SHADOWS: dict[str, tuple[str, ...]] = {
    "java": ("javascript",),
    "pg": ("upgrade", "jpg"),
}

# ============================================================================
# SKILL FALLBACK - category -> keyword (lower-case) -> display name
# Used when generated skill categories are unavailable.
# ============================================================================

SKILL_FALLBACK_KEYWORDS: dict[str, dict[str, str]] = {
    "technical": {
        "javascript": "JavaScript",
        "typescript": "TypeScript",
        "python": "Python",
        "java": "Java",
        "c#": "C#",
        "php": "PHP",
        "ruby": "Ruby",
        "golang": "Go",
        "rust": "Rust",
        "swift": "Swift",
    },
    "frameworks": {
        "react": "React",
        "vue": "Vue",
        "angular": "Angular",
        "express": "Express",
        "django": "Django",
        "flask": "Flask",
        "spring": "Spring",
        "laravel": "Laravel",
        "rails": "Rails",
    },
    "tools": {
        "git": "Git",
        "docker": "Docker",
        "kubernetes": "Kubernetes",
        "webpack": "Webpack",
        "babel": "Babel",
        "eslint": "ESLint",
        "jest": "Jest",
        "cypress": "Cypress",
    },
    "databases": {
        "mongodb": "MongoDB",
        "postgresql": "PostgreSQL",
        "mysql": "MySQL",
        "redis": "Redis",
        "elasticsearch": "Elasticsearch",
        "sqlite": "SQLite",
    },
}

SKILL_CATEGORIES: tuple[str, ...] = ("technical", "frameworks", "tools", "databases")

# ============================================================================
# TOOL DETECTION - exact file names and path prefixes in the project tree
# ============================================================================

TOOL_FILE_NAMES: dict[str, set[str]] = {
    "Docker": {"Dockerfile", "dockerfile", ".dockerignore", "docker-compose.yml", "docker-compose.yaml"},
    "npm": {"package.json", "package-lock.json"},
    "Yarn": {"yarn.lock"},
    "pnpm": {"pnpm-lock.yaml"},
    "Poetry": {"poetry.lock"},
    "pip": {"requirements.txt"},
    "Cargo": {"Cargo.toml", "Cargo.lock"},
    "Make": {"Makefile", "makefile"},
    "Webpack": {"webpack.config.js", "webpack.config.ts"},
    "Vite": {"vite.config.js", "vite.config.ts"},
    "ESLint": {".eslintrc", ".eslintrc.js", ".eslintrc.json", "eslint.config.js"},
    "Prettier": {".prettierrc", ".prettierrc.json", "prettier.config.js"},
    "Jest": {"jest.config.js", "jest.config.ts"},
    "PyTest": {"pytest.ini", "conftest.py"},
    "Travis CI": {".travis.yml"},
}  # fmt: skip

TOOL_PATH_PREFIXES: dict[str, tuple[str, ...]] = {
    "GitHub Actions": (".github/workflows/",),
    "GitLab CI": (".gitlab-ci.yml",),
    "CircleCI": (".circleci/",),
}

# ============================================================================
# PROJECT FILES
# ============================================================================

README_CANDIDATES: tuple[str, ...] = (
    "README.md",
    "readme.md",
    "README.MD",
    "README.rst",
    "README.txt",
    "readme.txt",
    "README",
)

MANIFEST_CANDIDATES: tuple[str, ...] = ("package.json", "pyproject.toml")

# Directory names never descended into when enumerating project files.
DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        ".vscode",
        "dist",
        "build",
        "out",
        ".next",
        "coverage",
        ".nyc_output",
        "__pycache__",
        ".venv",
        "venv",
    }
)
