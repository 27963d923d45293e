"""Read/modify/write store for the WakaTime INI config files.

Only a flat grammar is understood: ``[section]`` headers and
``key = value`` lines. There is no support for comments, quoting or
multi-line values. Section names are matched case-insensitively and
written lowercase; keys are matched exactly.

A line is an entry only when splitting it on ``=`` gives exactly two
parts, so values can not contain ``=``. Null bytes are stripped from
every line read and from keys and values before writing.

Every ``set`` rewrites the whole file. Lines outside the targeted entry
are written back unchanged. Two stores rewriting the same file at the
same time race, and the last write wins.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from wakacfg_mcp.config.location import ConfigLocation, Environment
from wakacfg_mcp.utils.logging_utils import Logger
from wakacfg_mcp.utils.singleton_utils import SingletonInstance

DEFAULT_DASHBOARD_URL = "https://wakatime.com/dashboard"

SETTINGS_SECTION = "settings"
API_KEY = "api_key"
API_KEY_VAULT_CMD = "api_key_vault_cmd"
API_URL = "api_url"

ENCODING = "utf-8"
# undecodable bytes survive a rewrite unchanged
ENCODING_ERRORS = "surrogateescape"

# space and every control character below it, nothing else
TRIM_CHARS = "".join(chr(code) for code in range(0x21))


def remove_nulls(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.replace("\0", "")


def trim(value: str) -> str:
    """Strip ASCII spaces and control characters from both ends.

    Unicode whitespace such as a no-break space is kept.
    """
    return value.strip(TRIM_CHARS)


def parse_section_header(line: str) -> Optional[str]:
    """Return the lowercased section name if ``line`` is a header."""
    stripped = trim(line)
    if stripped.startswith("[") and stripped.endswith("]"):
        return stripped[1:-1].lower()
    return None


def split_entry(line: str) -> Optional[Tuple[str, str]]:
    """Split a ``key = value`` line into its trimmed key and value.

    Returns None unless the line contains exactly one ``=``.
    """
    parts = line.split("=")
    if len(parts) != 2:
        return None
    return trim(parts[0]), trim(parts[1])


def format_entry(key: str, value: str) -> str:
    return f"{key} = {value}\n"


def new_file_contents(section: str, key: str, value: str) -> str:
    return f"[{section.lower()}]\n" + format_entry(key, value)


def api_url_to_dashboard_url(api_url: str) -> str:
    """Cut an API url at its first ``/api``.

    Example:
        https://example.com/api/v1 -> https://example.com
    """
    index = api_url.find("/api")
    if index == -1:
        return DEFAULT_DASHBOARD_URL
    return api_url[:index]


class SectionRewriter:
    """Rebuilds file contents with one entry replaced or added.

    Feed every line of the existing file (without its newline), then
    call finish() for the new contents. The entry is written in place of
    the first matching key line inside the first matching section block.
    When that block has no such line, the entry goes at the end of the
    block, right before the next section header. When no block matches,
    a new section is appended at the end of the file.
    """

    def __init__(self, section: str, key: str, value: str):
        self.section = section.lower()
        self.key = key
        self.entry = format_entry(key, value)
        self.current_section = ""
        self.found = False
        self._lines: List[str] = []

    def feed(self, line: str):
        line = remove_nulls(line)
        header = parse_section_header(line)
        if header is not None:
            # also fires on a repeated header of the target section
            if self.current_section == self.section and not self.found:
                self._emit_entry()
            self.current_section = header
            self._lines.append(line + "\n")
            return

        if self.current_section == self.section and not self.found:
            entry = split_entry(line)
            if entry is not None and entry[0] == self.key:
                self._emit_entry()
                return
        self._lines.append(line + "\n")

    def _emit_entry(self):
        self._lines.append(self.entry)
        self.found = True

    def finish(self) -> str:
        if not self.found:
            if self.current_section != self.section:
                self._lines.append(f"[{self.section}]\n")
            self._emit_entry()
        return "".join(self._lines)


class ConfigStore(SingletonInstance):
    """Get and set values in the public and internal config files.

    Holds the per-process caches: the base directory (through its
    ConfigLocation), the API key, the dashboard URL and the vault flag.
    All of them are filled once and never invalidated by ``set``, with
    the exception of ``set_api_key`` which updates the cached key.

    Not thread-safe; callers sharing a store across threads must lock.
    """

    def __init__(
        self,
        location: Optional[ConfigLocation] = None,
        logger=None,
        environment: Optional[Environment] = None,
    ):
        self._logger = logger if logger is not None else Logger.instance()
        if location is None:
            location = ConfigLocation(environment, logger=self._logger)
        self._location = location
        self._api_key = ""
        self._dashboard_url = ""
        self._using_vault_cmd = False

    @property
    def location(self) -> ConfigLocation:
        return self._location

    def path(self, internal: bool = False) -> Path:
        """Resolved path of the public or internal config file."""
        return self._location.path(internal)

    def get(self, section: str, key: str, internal: bool = False) -> Optional[str]:
        """Look up ``key`` in ``section``.

        Args:
            section: section name, any case
            key: key name, exact case
            internal: read the internal file instead of the public one

        Returns:
            The trimmed value of the first match, or None when the file,
            section or key is missing or the file can not be read.
        """
        path = self.path(internal)
        target = section.lower()
        try:
            with open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS) as fh:
                current_section = ""
                for line in fh:
                    line = remove_nulls(line.rstrip("\n"))
                    header = parse_section_header(line)
                    if header is not None:
                        current_section = header
                        continue
                    if current_section != target:
                        continue
                    entry = split_entry(line)
                    if entry is not None and entry[0] == key:
                        return entry[1]
        except FileNotFoundError:
            return None
        except OSError as e:
            self._logger.warning(f"Could not read config file {path}: {e}")
        return None

    def set(self, section: str, key: str, internal: bool = False, value: str = "") -> Optional[str]:
        """Write ``key = value`` into ``section``, rewriting the whole file.

        Args:
            section: section name, written lowercase when a header is added
            key: key name
            internal: write the internal file instead of the public one
            value: new value, may be empty

        Returns:
            None on success, otherwise an error message (also logged)
        """
        key = remove_nulls(key)
        value = remove_nulls(value)
        path = self.path(internal)

        rewriter = SectionRewriter(section, key, value)
        try:
            fh = open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS)
        except FileNotFoundError:
            contents = new_file_contents(section, key, value)
        except OSError as e:
            self._logger.error(f"Could not read config file {path}: {e}")
            contents = rewriter.finish()
        else:
            with fh:
                try:
                    for line in fh:
                        rewriter.feed(line.rstrip("\n"))
                except OSError as e:
                    self._logger.error(f"Could not read config file {path}: {e}")
            contents = rewriter.finish()

        return self._write(path, contents)

    def _write(self, path: Path, contents: str) -> Optional[str]:
        try:
            data = contents.encode(ENCODING, ENCODING_ERRORS)
            # the internal file lives one directory down
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as fh:
                fh.write(data)
        except (OSError, UnicodeEncodeError) as e:
            message = f"Could not write config file {path}: {e}"
            self._logger.error(message)
            return message
        return None

    def get_api_key(self) -> str:
        """API key from the [settings] section, cached once non-empty.

        When only ``api_key_vault_cmd`` is configured the store switches
        to vault mode for good and always reports an empty key.
        """
        if self._using_vault_cmd:
            return ""
        if self._api_key:
            return self._api_key

        api_key = self.get(SETTINGS_SECTION, API_KEY)
        if api_key is None:
            vault_cmd = self.get(SETTINGS_SECTION, API_KEY_VAULT_CMD)
            if vault_cmd is not None and trim(vault_cmd):
                self._using_vault_cmd = True
                return ""
            api_key = ""

        self._api_key = api_key
        return api_key

    def set_api_key(self, api_key: str) -> Optional[str]:
        error = self.set(SETTINGS_SECTION, API_KEY, False, api_key)
        self._api_key = remove_nulls(api_key)
        return error

    def using_vault_cmd(self) -> bool:
        return self._using_vault_cmd

    def get_dashboard_url(self) -> str:
        """Dashboard URL derived from ``api_url``, computed once."""
        if self._dashboard_url:
            return self._dashboard_url

        api_url = self.get(SETTINGS_SECTION, API_URL)
        if api_url is None:
            self._dashboard_url = DEFAULT_DASHBOARD_URL
        else:
            self._dashboard_url = api_url_to_dashboard_url(api_url)
        return self._dashboard_url


def get_config_store() -> ConfigStore:
    """Get the process-wide ConfigStore used by the server."""
    return ConfigStore.instance()
