"""게시물 본문 처리 서비스 — 저장 전 정리와 렌더링.

Post content processing — Cleans editor HTML before it is stored and
renders stored content back into an ordered list of blocks.

저장 (prepare_content):
    1. alt 없는 <img>에 파일명 기반 alt 주입 (Inject alt text)
    2. 카드 블록 <div data-type="card-block"> 을 ``[Card Block ID: X]`` 로 치환
    3. 남은 본문의 <img>/<video> 를 문서 순서대로 미디어로 추출 (Extract media)
    4. 태그를 제거한 요약 생성 (Excerpt)

렌더링 (render_post):
    플레이스홀더로 본문을 나누고, HTML 조각의 미디어는 저장된 미디어로,
    플레이스홀더는 카드 데이터로 교체합니다. 단일 선형 패스.

모든 함수는 DB에 접근하지 않습니다 (pure functions).
"""

import re
import time
from dataclasses import dataclass, field
from html import escape
from html.parser import HTMLParser
from typing import Any, Awaitable, Callable

# 카드 블록 플레이스홀더 — ``[Card Block ID: <id>]``
CARD_PLACEHOLDER_RE: re.Pattern[str] = re.compile(r"\[Card Block ID: (.*?)\]")

DEFAULT_EXCERPT_LENGTH: int = 160
DEFAULT_IMAGE_ALT: str = "Image"
RENDERED_IMAGE_ALT: str = "Post image"

_VOID_TAGS: frozenset[str] = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})
_TAG_RE = re.compile(r"<[^>]*>")
_SLUG_DROP_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_WORD_SEPARATOR_RE = re.compile(r"[-_]+")


@dataclass
class _Element:
    """스캔된 HTML 요소의 위치 정보 — Source span of a scanned element."""

    tag: str
    attrs: dict[str, str | None]
    start: int
    start_tag_end: int
    end: int
    self_closing: bool = False

    @property
    def start_tag(self) -> tuple[int, int]:
        return self.start, self.start_tag_end


class _ElementScanner(HTMLParser):
    """원본 문자열 오프셋을 보존하는 HTML 요소 스캐너.

    Records every element whose tag is in ``tags`` together with the
    character span it occupies in the original markup, so callers can
    splice the source string instead of re-serializing a DOM.
    """

    def __init__(self, html: str, tags: frozenset[str]) -> None:
        super().__init__(convert_charrefs=True)
        self._html = html
        self._tags = tags
        self._line_starts: list[int] = [0]
        for line in html.split("\n")[:-1]:
            self._line_starts.append(self._line_starts[-1] + len(line) + 1)
        self._open: list[tuple[str, _Element | None]] = []
        self.elements: list[_Element] = []

    def _offset(self) -> int:
        line, column = self.getpos()
        return self._line_starts[line - 1] + column

    def _record(self, tag: str, attrs: list[tuple[str, str | None]], self_closing: bool) -> _Element | None:
        start = self._offset()
        raw = self.get_starttag_text() or ""
        element: _Element | None = None
        if tag in self._tags:
            element = _Element(
                tag=tag,
                attrs=dict(attrs),
                start=start,
                start_tag_end=start + len(raw),
                end=start + len(raw),
                self_closing=self_closing,
            )
            self.elements.append(element)
        return element

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = self._record(tag, attrs, self_closing=False)
        if tag not in _VOID_TAGS:
            self._open.append((tag, element))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._record(tag, attrs, self_closing=True)

    def handle_endtag(self, tag: str) -> None:
        for index in range(len(self._open) - 1, -1, -1):
            if self._open[index][0] != tag:
                continue
            element = self._open[index][1]
            del self._open[index:]
            if element is not None:
                close = self._html.find(">", self._offset())
                element.end = len(self._html) if close == -1 else close + 1
            return


def _scan(html: str, *tags: str) -> list[_Element]:
    scanner = _ElementScanner(html, frozenset(tags))
    scanner.feed(html)
    scanner.close()
    return scanner.elements


def _splice(html: str, replacements: list[tuple[int, int, str]]) -> str:
    """겹치지 않는 (start, end, text) 치환을 적용 — Apply non-overlapping splices."""
    parts: list[str] = []
    cursor = 0
    for start, end, text in sorted(replacements):
        if start < cursor:
            continue
        parts.append(html[cursor:start])
        parts.append(text)
        cursor = end
    parts.append(html[cursor:])
    return "".join(parts)


def _build_tag(tag: str, attrs: dict[str, str | None], self_closing: bool) -> str:
    rendered = "".join(
        f" {name}" if value is None else f' {name}="{escape(value, quote=True)}"'
        for name, value in attrs.items()
    )
    return f"<{tag}{rendered}{' /' if self_closing else ''}>"


# ─── 저장 전 처리 — Pre-save processing ──────────────────────────────────


def alt_from_src(src: str | None) -> str:
    """이미지 경로에서 alt 텍스트를 만듭니다.

    Derive alt text from an image URL: last path segment, text before the
    first ``.``, ``-``/``_`` turned into spaces, each word capitalized.

    Example:
        >>> alt_from_src("https://cdn.example.com/uploads/summer-beach_trip.final.jpg")
        'Summer Beach Trip'
    """
    if not src:
        return DEFAULT_IMAGE_ALT
    name = src.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1].split(".", 1)[0]
    words = _WORD_SEPARATOR_RE.sub(" ", name).split()
    if not words:
        return DEFAULT_IMAGE_ALT
    return " ".join(word[:1].upper() + word[1:] for word in words)


def inject_alt_text(html: str) -> str:
    """alt 속성이 없거나 빈 <img> 에 alt 를 주입합니다.

    Returns the input unchanged when every image already has alt text.
    """
    replacements: list[tuple[int, int, str]] = []
    for element in _scan(html, "img"):
        if (element.attrs.get("alt") or "").strip():
            continue
        attrs = dict(element.attrs)
        attrs["alt"] = alt_from_src(attrs.get("src"))
        start, end = element.start_tag
        replacements.append((start, end, _build_tag("img", attrs, element.self_closing)))

    if not replacements:
        return html
    return _splice(html, replacements)


def _media_elements(html: str) -> list[_Element]:
    """미디어로 취급하는 요소 — <img>/<video> with a src, document order.

    Anything nested inside a <video> (sources, fallback images) is not media.
    """
    elements: list[_Element] = []
    covered_until = 0
    for element in _scan(html, "img", "video"):
        if element.start < covered_until:
            continue
        if element.tag == "video":
            covered_until = element.end
        if element.attrs.get("src"):
            elements.append(element)
    return elements


def extract_media(html: str) -> list[dict[str, str]]:
    """본문의 <img>/<video> 를 문서 순서대로 추출합니다.

    Returns:
        list[dict]: [{url, type ("image" | "video"), alt}] — src 없는 요소는 제외
    """
    media: list[dict[str, str]] = []
    for element in _media_elements(html):
        is_image = element.tag == "img"
        media.append({
            "url": element.attrs["src"] or "",
            "type": "image" if is_image else "video",
            "alt": (element.attrs.get("alt") or "") if is_image else "",
        })
    return media


def replace_card_blocks(html: str) -> tuple[str, list[dict[str, Any]]]:
    """카드 블록 div 를 플레이스홀더로 치환합니다.

    Replace every ``<div data-type="card-block" data-card-id="X">…</div>``
    (nested content included) with ``[Card Block ID: X]``.

    Returns:
        tuple[str, list[dict]]: (치환된 HTML, [{card_id, position}])
    """
    replacements: list[tuple[int, int, str]] = []
    card_blocks: list[dict[str, Any]] = []
    covered_until = 0
    for element in _scan(html, "div"):
        if element.attrs.get("data-type") != "card-block":
            continue
        card_id = element.attrs.get("data-card-id")
        if not card_id or element.start < covered_until:
            continue
        replacements.append((element.start, element.end, f"[Card Block ID: {card_id}]"))
        card_blocks.append({"card_id": card_id, "position": len(card_blocks)})
        covered_until = element.end

    if not replacements:
        return html, []
    return _splice(html, replacements), card_blocks


def strip_tags(html: str) -> str:
    return _TAG_RE.sub("", html)


def make_excerpt(html: str, limit: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """태그를 제거한 앞부분 ``limit`` 글자 — Tag-stripped leading text."""
    return strip_tags(html)[:limit]


def slugify(title: str, now: float | None = None) -> str:
    """제목으로 고유 슬러그를 만듭니다.

    Lower-case, drop punctuation, hyphenate whitespace and append the last
    six digits of the millisecond timestamp.

    Example:
        >>> slugify("Hello, World!", now=1700000123.456)
        'hello-world-123456'
    """
    millis = int((time.time() if now is None else now) * 1000)
    base = _WHITESPACE_RE.sub("-", _SLUG_DROP_RE.sub("", title.lower()))
    return f"{base}-{str(millis)[-6:]}"


@dataclass
class PreparedContent:
    """저장 준비된 본문 — Cleaned body plus derived media and card blocks."""

    content: str
    media: list[dict[str, str]] = field(default_factory=list)
    card_blocks: list[dict[str, Any]] = field(default_factory=list)
    excerpt: str = ""


def prepare_content(html: str) -> PreparedContent:
    """에디터 HTML 을 저장 가능한 형태로 정리합니다."""
    content, card_blocks = replace_card_blocks(inject_alt_text(html))
    # 카드 내부 이미지는 본문 미디어가 아님 (Card markup is gone from the body)
    return PreparedContent(
        content=content,
        media=extract_media(content),
        card_blocks=card_blocks,
        excerpt=make_excerpt(content),
    )


# ─── 렌더링 — Rendering ───────────────────────────────────────────────────


def split_content(content: str) -> list[str]:
    """플레이스홀더로 본문을 나눕니다 — even indices HTML, odd indices card ids."""
    return CARD_PLACEHOLDER_RE.split(content)


def _media_markup(item: Any) -> str:
    url = escape(item.url, quote=True)
    if item.type == "image":
        alt = escape(item.alt or RENDERED_IMAGE_ALT, quote=True)
        return f'<img src="{url}" alt="{alt}" />'
    return f'<video src="{url}" controls></video>'


def _swap_media(segment: str, media: list[Any], start_index: int) -> tuple[str, int]:
    """HTML 조각의 미디어 요소를 저장된 미디어로 순서대로 교체합니다."""
    index = start_index
    replacements: list[tuple[int, int, str]] = []
    for element in _media_elements(segment):
        if index >= len(media):
            break
        replacements.append((element.start, element.end, _media_markup(media[index])))
        index += 1
    return _splice(segment, replacements), index


CardFetcher = Callable[[str], Awaitable[dict[str, Any]]]


async def render_post(post: Any, fetch_card: CardFetcher) -> list[dict[str, Any]]:
    """저장된 게시물을 렌더링 블록 목록으로 변환합니다.

    Render a stored post into ordered blocks in a single linear pass.

    - HTML 조각: <img>/<video> 를 저장된 미디어로 순서대로 교체
      (counter shared across segments, only while media remain)
    - 플레이스홀더: n 번째 플레이스홀더 ↔ n 번째 카드 블록 (position 순);
      범위를 벗어나면 건너뜀 (skipped when out of range)

    Args:
        post: ``content``, ``media`` (문서 순서), ``card_blocks`` 를 가진 게시물
        fetch_card: 카드 ID → 카드 데이터 코루틴 (Card loader)

    Returns:
        list[dict]: {"type": "html", "html"} | {"type": "card", "card_id", "card"}
    """
    media = list(post.media)
    card_blocks = sorted(post.card_blocks, key=lambda block: block.position)
    blocks: list[dict[str, Any]] = []
    media_index = 0
    card_index = 0

    for i, part in enumerate(split_content(post.content or "")):
        if i % 2 == 0:
            if not part:
                continue
            html, media_index = _swap_media(part, media, media_index)
            blocks.append({"type": "html", "html": html})
            continue

        if card_index >= len(card_blocks):
            continue
        card_id = card_blocks[card_index].card_id
        card_index += 1
        blocks.append({"type": "card", "card_id": card_id, "card": await fetch_card(card_id)})

    return blocks
