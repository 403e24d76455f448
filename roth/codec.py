"""XML envelope used by the controller's read endpoint.

Request::

    <body>
       <item_list>
          <i>
             <n>G0.RaumTemp</n>
          </i>
       </item_list>
    </body>

Response::

    <body>
       <item_list>
          <i>
             <n>G0.RaumTemp</n>
             <v>2086</v>
          </i>
       </item_list>
    </body>
"""

from __future__ import annotations

from collections.abc import Iterable
import xml.etree.ElementTree as ET

from .exceptions import RothDecodeError
from .models import WireItem

_ROOT = "body"
_ITEM_LIST = "item_list"
_ITEM = "i"
_NAME = "n"
_VALUE = "v"
_INDENT = "   "


def encode_request(names: Iterable[str]) -> bytes:
    """Serialize item names into a read request body."""
    root = ET.Element(_ROOT)
    item_list = ET.SubElement(root, _ITEM_LIST)
    for name in names:
        item = ET.SubElement(item_list, _ITEM)
        ET.SubElement(item, _NAME).text = name
    ET.indent(root, space=_INDENT)
    return ET.tostring(root, encoding="unicode").encode("utf-8")


def decode_response(data: bytes | str) -> list[WireItem]:
    """Parse a read response body into name/value pairs.

    Items without a value element decode to an empty string value.
    """
    try:
        root = ET.fromstring(data)
    except (ET.ParseError, ValueError) as err:
        raise RothDecodeError(f"Failed to parse response: {err}") from err

    item_list = root.find(_ITEM_LIST)
    if item_list is None:
        raise RothDecodeError(f"No {_ITEM_LIST} element in response")

    return [
        WireItem(item.findtext(_NAME, default=""), item.findtext(_VALUE, default=""))
        for item in item_list.iterfind(_ITEM)
    ]
