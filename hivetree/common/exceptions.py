# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Exception classes for hivetree.

Exceptions derived from `HivetreeException` are internal signals
between the decoder, the walker and the tree. Exceptions derived
from `HivetreeUserError` reach the caller and carry a friendly
explanation with help links, rendered as text or, in a notebook,
as HTML.
"""
import contextlib
import html
import sys
import traceback
from typing import Any, Dict, List, Optional, Tuple, Union

from IPython.display import display

from .._version import VERSION
from .utility import is_ipython

__version__ = VERSION

HelpUri = Union[Tuple[str, str], str]


# placeholder for pkg_config.get_config - this function is
# overwritten by hivetree.common.pkg_config
def _get_config(setting_path: str, default=None):
    del setting_path, default
    return True


class HivetreeException(Exception):  # noqa: N818
    """Default exception class for hivetree."""


class HivetreeConfigError(HivetreeException):
    """Configuration exception class for hivetree."""


class HiveEnumerationError(HivetreeException):
    """The key/value cursor of a hive key failed mid-enumeration."""


class HiveValueReadError(HivetreeException):
    """A registry value payload could not be read from the hive."""


class HiveValueDecodeError(HivetreeException):
    """A registry value payload could not be decoded."""


class TreeNodeNotFoundError(HivetreeException, KeyError):
    """A tree node id is not resident in the tree."""


def _uri_parts(uri: HelpUri) -> Tuple[str, str]:
    """Return (name, url) for a help link."""
    if isinstance(uri, tuple):
        return uri
    return uri, uri


def _stack_context(stack: List[str]) -> List[str]:
    """Return the creation stack and any exception being handled."""
    context = ["Stack:", *stack]
    ex_type, ex_value, ex_traceback = sys.exc_info()
    if ex_traceback is not None:
        context.extend(
            [
                "---",
                "Exception was raised by:",
                *traceback.format_exception(ex_type, ex_value, ex_traceback),
            ]
        )
    return context


# Derived user exceptions are named with an "Error" suffix
# and are the only ones shown to the user.
class HivetreeUserError(HivetreeException):
    """
    Hivetree user exception displaying a friendly message.

    The explanation is made of a title, message lines, help links
    and the stack where the exception was created.

    """

    _display_exceptions = True

    DEF_HELP_URI: HelpUri = (
        "hivetree documentation",
        "https://hivetree.readthedocs.io",
    )
    _DEF_TITLE = "we've hit an error while running"
    _HTML_STYLE = """
        <style>
            div.solid {border: thin solid black; padding:10px;}
            p.title {background-color:Tomato; padding:5px;}
            ul.circle {list-style-type: circle;}
        </style>
        """

    def __init__(self, *args, help_uri: Optional[HelpUri] = None, **kwargs):
        """
        Create an instance of the HivetreeUserError class.

        Parameters
        ----------
        args : Iterable of strings
            Lines of the explanation.
        help_uri : Optional[HelpUri], optional
            Primary help link, either a URL or a (name, URL) tuple.
            By default the `DEF_HELP_URI` of the class.

        Other Parameters
        ----------------
        title : str, optional
            Text of the title line.
        *_uri : HelpUri, optional
            Any other keyword argument ending in "_uri" is added
            as a further help link.
        display : bool, optional
            Display the explanation when the exception is created,
            by default False.

        """
        title = kwargs.pop("title", self._DEF_TITLE)
        display_now = kwargs.pop("display", False)
        self.title = f"{type(self).__name__} - {title}"
        self.messages = [str(arg) for arg in args]
        self.help_uris: List[HelpUri] = [help_uri or self.DEF_HELP_URI]
        self.help_uris.extend(
            uri for name, uri in kwargs.items() if name.endswith("_uri")
        )
        self._context = _stack_context(traceback.format_stack(limit=5))
        self._has_displayed = False
        super().__init__(title, *args, *self.help_uris)
        if display_now and _get_config("hivetree.FriendlyExceptions", True):
            self.display_exception()

    @classmethod
    @contextlib.contextmanager
    def no_display_exceptions(cls):
        """Context manager to block exception display to IPython/stdout."""
        cls._display_exceptions = False
        try:
            yield
        finally:
            cls._display_exceptions = True

    def display_exception(self):
        """Show the explanation once, as HTML in a notebook or else as text."""
        if self._has_displayed or not self._display_exceptions:
            return
        if is_ipython(notebook=True):
            display(self)
        else:
            print(self._get_exception_text())
        self._has_displayed = True

    def _repr_html_(self) -> str:
        """Return HTML-formatted explanation."""
        content = [f"<h3><p class='title'>{html.escape(self.title)}</p></h3>"]
        content.extend(
            f"{html.escape(message).replace(chr(10), '<br>')}<br>"
            for message in self.messages
        )
        content.append("<br>For more help on fixing this error see:<br>")
        for uri in self.help_uris:
            name, url = _uri_parts(uri)
            content.append(
                f"<ul class='circle'><li><a href='{url}' target='_blank'"
                f" rel='noopener noreferrer'>{html.escape(name)}</a></li></ul>"
            )
        return f"{self._HTML_STYLE}<div class='solid'>{''.join(content)}</div>"

    def _get_exception_text(self) -> str:
        rule = "-" * len(self.title)
        lines = [rule, self.title, rule, *self.messages]
        lines.extend(["", "For more help on fixing this error see:"])
        for uri in self.help_uris:
            name, url = _uri_parts(uri)
            lines.append(f" - {name}: {url}" if name != url else f" - {url}")
        if self._context:
            lines.extend(["", "Exception context:", *self._context])
        return "\n".join(lines)


class HivetreeUserConfigError(HivetreeUserError):
    """Configuration user exception class for hivetree."""

    DEF_HELP_URI = (
        "Configuring hivetree",
        "https://hivetree.readthedocs.io/en/latest/getting_started/config.html",
    )
    _CONFIG_HINTS = (
        "Set the HIVETREECONFIG environment variable to the path of your"
        " hivetreeconfig.yaml,",
        "or put the file in the current directory or in ~/.hivetree.",
    )

    def __init__(self, *args, help_uri: Optional[HelpUri] = None, **kwargs):
        """
        Create a user configuration exception.

        Parameters
        ----------
        help_uri : Optional[HelpUri], optional
            Override the default help URI. The configuration
            help page is then listed as a further link.

        """
        if not args:
            args = ("There is a problem with your hivetree configuration.",)
        if help_uri:
            kwargs.setdefault("config_uri", self.DEF_HELP_URI)
        super().__init__(*args, *self._CONFIG_HINTS, help_uri=help_uri, **kwargs)


def _pop_required(kwargs: Dict[str, Any], name: str) -> Any:
    value = kwargs.pop(name, None)
    if not value:
        raise AttributeError(f"Keyword argument '{name}' must be supplied")
    return value


class HiveInputError(HivetreeUserError):
    """Base class for errors locating or opening the hive input."""

    DEF_HELP_URI = (
        "Parsing registry hives",
        "https://hivetree.readthedocs.io/en/latest/parsing/RegistryHives.html",
    )


class HiveArgumentMissingError(HiveInputError):
    """
    The input file node id could not be resolved in the tree.

    Requires an `argument` keyword argument naming what was
    not found.
    """

    def __init__(self, *args, **kwargs):
        """Create argument missing exception."""
        argument = _pop_required(kwargs, "argument")
        super().__init__(
            *args, f"Argument '{argument}' was not found in the tree.", **kwargs
        )


class HiveValueMissingError(HiveInputError):
    """
    The input node has no attribute holding the hive data.

    Requires a `value` keyword argument naming the missing attribute.
    """

    def __init__(self, *args, **kwargs):
        """Create value missing exception."""
        value = _pop_required(kwargs, "value")
        super().__init__(
            *args, f"The input node has no '{value}' attribute.", **kwargs
        )


class HiveValueTypeMismatchError(HiveInputError):
    """The hive data attribute cannot be opened as a stream."""


class HiveFormatError(HiveInputError):
    """The hive decoder rejected the input bytes."""
