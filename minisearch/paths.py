# minisearch/paths.py

# --- Persisted index (written by the indexer into the working directory) ---
INDEX_PATH = "index.data"

# --- Postings codec used when nothing else is asked for ("gaps" | "varbyte") ---
DEFAULT_CODEC = "gaps"

# --- Query prompt ---
PROMPT = "> "
EXIT_COMMANDS = ("exit", "quit")
DEFAULT_LIMIT = 5  # results shown per query

# --- Snippet window (characters) ---
SNIPPET_BEFORE = 100    # context kept before the match
SNIPPET_AFTER = 200     # context kept after the match start (plus the term itself)
SNIPPET_FALLBACK = 200  # prefix shown when the term is not in the body
