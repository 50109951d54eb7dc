"""Fixed translation tables for HTML to JSX conversion.

Lookups use the lowercased HTML attribute name. Names missing from every
table pass through unchanged, which keeps ``data-*`` and ``aria-*``
attributes, custom element attributes and already camelCased SVG attributes
as written.
"""

from typing import Dict

ATTRIBUTE_NAME_MAP: Dict[str, str] = {
    # Reserved words in JavaScript
    "class": "className",
    "for": "htmlFor",
    # HTML attributes that React spells in camelCase
    "accept-charset": "acceptCharset",
    "accesskey": "accessKey",
    "allowfullscreen": "allowFullScreen",
    "autocapitalize": "autoCapitalize",
    "autocomplete": "autoComplete",
    "autofocus": "autoFocus",
    "autoplay": "autoPlay",
    "cellpadding": "cellPadding",
    "cellspacing": "cellSpacing",
    "charset": "charSet",
    "classid": "classID",
    "colspan": "colSpan",
    "contenteditable": "contentEditable",
    "contextmenu": "contextMenu",
    "controlslist": "controlsList",
    "crossorigin": "crossOrigin",
    "datetime": "dateTime",
    "enctype": "encType",
    "enterkeyhint": "enterKeyHint",
    "fetchpriority": "fetchPriority",
    "formaction": "formAction",
    "formenctype": "formEncType",
    "formmethod": "formMethod",
    "formnovalidate": "formNoValidate",
    "formtarget": "formTarget",
    "frameborder": "frameBorder",
    "hreflang": "hrefLang",
    "http-equiv": "httpEquiv",
    "inputmode": "inputMode",
    "itemprop": "itemProp",
    "itemref": "itemRef",
    "itemscope": "itemScope",
    "itemtype": "itemType",
    "marginheight": "marginHeight",
    "marginwidth": "marginWidth",
    "maxlength": "maxLength",
    "mediagroup": "mediaGroup",
    "minlength": "minLength",
    "nomodule": "noModule",
    "novalidate": "noValidate",
    "playsinline": "playsInline",
    "readonly": "readOnly",
    "referrerpolicy": "referrerPolicy",
    "rowspan": "rowSpan",
    "spellcheck": "spellCheck",
    "srcdoc": "srcDoc",
    "srclang": "srcLang",
    "srcset": "srcSet",
    "tabindex": "tabIndex",
    "usemap": "useMap",
    # SVG presentation and XML attributes
    "alignment-baseline": "alignmentBaseline",
    "baseline-shift": "baselineShift",
    "clip-path": "clipPath",
    "clip-rule": "clipRule",
    "color-interpolation": "colorInterpolation",
    "color-interpolation-filters": "colorInterpolationFilters",
    "dominant-baseline": "dominantBaseline",
    "fill-opacity": "fillOpacity",
    "fill-rule": "fillRule",
    "flood-color": "floodColor",
    "flood-opacity": "floodOpacity",
    "font-family": "fontFamily",
    "font-size": "fontSize",
    "font-style": "fontStyle",
    "font-weight": "fontWeight",
    "image-rendering": "imageRendering",
    "letter-spacing": "letterSpacing",
    "lighting-color": "lightingColor",
    "marker-end": "markerEnd",
    "marker-mid": "markerMid",
    "marker-start": "markerStart",
    "paint-order": "paintOrder",
    "pointer-events": "pointerEvents",
    "shape-rendering": "shapeRendering",
    "stop-color": "stopColor",
    "stop-opacity": "stopOpacity",
    "stroke-dasharray": "strokeDasharray",
    "stroke-dashoffset": "strokeDashoffset",
    "stroke-linecap": "strokeLinecap",
    "stroke-linejoin": "strokeLinejoin",
    "stroke-miterlimit": "strokeMiterlimit",
    "stroke-opacity": "strokeOpacity",
    "stroke-width": "strokeWidth",
    "text-anchor": "textAnchor",
    "text-decoration": "textDecoration",
    "text-rendering": "textRendering",
    "vector-effect": "vectorEffect",
    "word-spacing": "wordSpacing",
    "writing-mode": "writingMode",
    "xlink:actuate": "xlinkActuate",
    "xlink:arcrole": "xlinkArcrole",
    "xlink:href": "xlinkHref",
    "xlink:role": "xlinkRole",
    "xlink:show": "xlinkShow",
    "xlink:title": "xlinkTitle",
    "xlink:type": "xlinkType",
    "xml:base": "xmlBase",
    "xml:lang": "xmlLang",
    "xml:space": "xmlSpace",
    "xmlns:xlink": "xmlnsXlink",
}

EVENT_HANDLER_MAP: Dict[str, str] = {
    # Mouse
    "onclick": "onClick",
    "oncontextmenu": "onContextMenu",
    "ondblclick": "onDoubleClick",
    "onmousedown": "onMouseDown",
    "onmouseenter": "onMouseEnter",
    "onmouseleave": "onMouseLeave",
    "onmousemove": "onMouseMove",
    "onmouseout": "onMouseOut",
    "onmouseover": "onMouseOver",
    "onmouseup": "onMouseUp",
    "onwheel": "onWheel",
    # Pointer
    "onpointerdown": "onPointerDown",
    "onpointermove": "onPointerMove",
    "onpointerup": "onPointerUp",
    "onpointercancel": "onPointerCancel",
    "onpointerenter": "onPointerEnter",
    "onpointerleave": "onPointerLeave",
    "onpointerover": "onPointerOver",
    "onpointerout": "onPointerOut",
    # Touch
    "ontouchstart": "onTouchStart",
    "ontouchmove": "onTouchMove",
    "ontouchend": "onTouchEnd",
    "ontouchcancel": "onTouchCancel",
    # Drag and drop
    "ondrag": "onDrag",
    "ondragend": "onDragEnd",
    "ondragenter": "onDragEnter",
    "ondragleave": "onDragLeave",
    "ondragover": "onDragOver",
    "ondragstart": "onDragStart",
    "ondrop": "onDrop",
    # Keyboard
    "onkeydown": "onKeyDown",
    "onkeypress": "onKeyPress",
    "onkeyup": "onKeyUp",
    # Focus
    "onblur": "onBlur",
    "onfocus": "onFocus",
    "onfocusin": "onFocusIn",
    "onfocusout": "onFocusOut",
    # Form
    "onchange": "onChange",
    "oninput": "onInput",
    "oninvalid": "onInvalid",
    "onreset": "onReset",
    "onsubmit": "onSubmit",
    "onselect": "onSelect",
    # Clipboard
    "oncopy": "onCopy",
    "oncut": "onCut",
    "onpaste": "onPaste",
    # Composition
    "oncompositionend": "onCompositionEnd",
    "oncompositionstart": "onCompositionStart",
    "oncompositionupdate": "onCompositionUpdate",
    # Media and resources
    "onabort": "onAbort",
    "oncanplay": "onCanPlay",
    "oncanplaythrough": "onCanPlayThrough",
    "ondurationchange": "onDurationChange",
    "onemptied": "onEmptied",
    "onended": "onEnded",
    "onerror": "onError",
    "onload": "onLoad",
    "onloadeddata": "onLoadedData",
    "onloadedmetadata": "onLoadedMetadata",
    "onloadstart": "onLoadStart",
    "onpause": "onPause",
    "onplay": "onPlay",
    "onplaying": "onPlaying",
    "onprogress": "onProgress",
    "onratechange": "onRateChange",
    "onseeked": "onSeeked",
    "onseeking": "onSeeking",
    "onstalled": "onStalled",
    "onsuspend": "onSuspend",
    "ontimeupdate": "onTimeUpdate",
    "onvolumechange": "onVolumeChange",
    "onwaiting": "onWaiting",
    # Other UI events
    "onscroll": "onScroll",
    "ontoggle": "onToggle",
    "onanimationstart": "onAnimationStart",
    "onanimationend": "onAnimationEnd",
    "onanimationiteration": "onAnimationIteration",
    "ontransitionend": "onTransitionEnd",
}

# Elements whose text keeps its whitespace exactly
PREFORMATTED_ELEMENTS = frozenset({"pre", "textarea", "listing"})


def translate_attribute_name(name: str) -> str:
    """Translate an HTML attribute name to its JSX spelling.

    Args:
        name: Attribute name as written in the HTML source

    Returns:
        The JSX name from the fixed tables, or ``name`` unchanged

    Examples:
        >>> translate_attribute_name("class")
        'className'
        >>> translate_attribute_name("ONCLICK")
        'onClick'
        >>> translate_attribute_name("data-id")
        'data-id'
    """
    lowered = name.lower()
    if lowered in ATTRIBUTE_NAME_MAP:
        return ATTRIBUTE_NAME_MAP[lowered]
    if lowered in EVENT_HANDLER_MAP:
        return EVENT_HANDLER_MAP[lowered]
    return name
