"""본문 처리 테스트 — alt 주입, 미디어 추출, 카드 블록 치환, 렌더링.

Content processing tests — Pure functions in content_service, no database.
"""

from types import SimpleNamespace

from app.services.content_service import (
    alt_from_src,
    extract_media,
    inject_alt_text,
    make_excerpt,
    prepare_content,
    render_post,
    replace_card_blocks,
    slugify,
    split_content,
)


def _media(url: str, type: str = "image", alt: str = "") -> SimpleNamespace:
    return SimpleNamespace(url=url, type=type, alt=alt)


def _post(content: str, media=(), card_ids=()) -> SimpleNamespace:
    return SimpleNamespace(
        content=content,
        media=list(media),
        card_blocks=[SimpleNamespace(card_id=c, position=i) for i, c in enumerate(card_ids)],
    )


async def _fake_card(card_id: str) -> dict:
    return {"id": card_id, "title": f"Card {card_id}"}


class TestAltText:
    """alt 텍스트 생성 테스트."""

    def test_alt_from_filename(self):
        """파일명에서 단어별 대문자 alt 생성."""
        assert alt_from_src("https://cdn.example.com/a/summer-beach_trip.final.jpg") == "Summer Beach Trip"

    def test_alt_ignores_query_string(self):
        assert alt_from_src("/img/red-car.png?w=300") == "Red Car"

    def test_alt_without_src(self):
        """src 없으면 기본값."""
        assert alt_from_src(None) == "Image"
        assert alt_from_src("") == "Image"

    def test_inject_alt_missing_and_empty(self):
        """alt 없음/빈 alt 모두 주입."""
        html = '<p><img src="/a/blue-sky.jpg"><img src="/b/x.png" alt=""></p>'
        result = inject_alt_text(html)
        assert 'alt="Blue Sky"' in result
        assert 'alt="X"' in result
        assert result.startswith("<p>") and result.endswith("</p>")

    def test_inject_alt_keeps_existing(self):
        """기존 alt 가 있으면 원본 그대로."""
        html = '<img src="/a/photo.jpg" alt="My photo">'
        assert inject_alt_text(html) == html

    def test_inject_alt_preserves_other_attributes(self):
        html = '<img class="wide" src="/a/sun-set.jpg" />'
        result = inject_alt_text(html)
        assert 'class="wide"' in result
        assert 'alt="Sun Set"' in result
        assert result.endswith("/>")


class TestExtractMedia:
    """미디어 추출 테스트."""

    def test_document_order(self):
        """이미지와 비디오를 문서 순서대로 추출."""
        html = '<img src="/1.jpg" alt="one"><p>x</p><video src="/2.mp4"></video><img src="/3.jpg">'
        media = extract_media(html)
        assert [m["url"] for m in media] == ["/1.jpg", "/2.mp4", "/3.jpg"]
        assert [m["type"] for m in media] == ["image", "video", "image"]
        assert media[0]["alt"] == "one"
        assert media[1]["alt"] == ""

    def test_skips_elements_without_src(self):
        assert extract_media('<img alt="no src"><video></video>') == []

    def test_skips_video_fallback_content(self):
        html = '<video src="/v.mp4"><img src="/poster.jpg"></video><img src="/after.jpg">'
        assert [m["url"] for m in extract_media(html)] == ["/v.mp4", "/after.jpg"]


class TestCardBlocks:
    """카드 블록 치환 테스트."""

    def test_replace_with_placeholder(self):
        """카드 div 를 플레이스홀더로 치환 (중첩 내용 포함)."""
        html = (
            '<p>Intro</p>'
            '<div data-type="card-block" data-card-id="abc"><div><span>Card</span></div></div>'
            '<p>Outro</p>'
        )
        content, blocks = replace_card_blocks(html)
        assert content == "<p>Intro</p>[Card Block ID: abc]<p>Outro</p>"
        assert blocks == [{"card_id": "abc", "position": 0}]

    def test_positions_follow_document_order(self):
        html = (
            '<div data-type="card-block" data-card-id="a"></div>'
            '<p>mid</p>'
            '<div data-type="card-block" data-card-id="b"></div>'
        )
        content, blocks = replace_card_blocks(html)
        assert content == "[Card Block ID: a]<p>mid</p>[Card Block ID: b]"
        assert blocks == [{"card_id": "a", "position": 0}, {"card_id": "b", "position": 1}]

    def test_other_divs_untouched(self):
        html = '<div class="note">hi</div>'
        assert replace_card_blocks(html) == (html, [])

    def test_card_without_id_untouched(self):
        html = '<div data-type="card-block">x</div>'
        assert replace_card_blocks(html) == (html, [])


class TestExcerptAndSlug:
    """요약과 슬러그 테스트."""

    def test_excerpt_strips_tags_and_truncates(self):
        html = "<p>" + "a" * 200 + "</p>"
        assert make_excerpt(html) == "a" * 160
        assert make_excerpt("<b>Hi</b> there", limit=5) == "Hi th"

    def test_slugify(self):
        """소문자, 구두점 제거, 공백 하이픈, 타임스탬프 6자리."""
        assert slugify("Hello, World!", now=1700000123.456) == "hello-world-123456"

    def test_slugify_collapses_whitespace(self):
        assert slugify("  Many   spaces ", now=1.0).startswith("-many-spaces-")


class TestPrepareContent:
    """저장 전 처리 통합 테스트."""

    def test_prepare_content(self):
        html = (
            '<p>Hello <b>world</b></p>'
            '<img src="/u/cover-photo.jpg">'
            '<div data-type="card-block" data-card-id="c1"><p>card</p></div>'
        )
        prepared = prepare_content(html)
        assert 'alt="Cover Photo"' in prepared.content
        assert "[Card Block ID: c1]" in prepared.content
        assert "card-block" not in prepared.content
        assert prepared.media == [{"url": "/u/cover-photo.jpg", "type": "image", "alt": "Cover Photo"}]
        assert prepared.card_blocks == [{"card_id": "c1", "position": 0}]
        assert prepared.excerpt.startswith("Hello world")

    def test_split_content(self):
        parts = split_content("<p>a</p>[Card Block ID: x]<p>b</p>")
        assert parts == ["<p>a</p>", "x", "<p>b</p>"]


class TestRenderPost:
    """렌더링 테스트."""

    async def test_render_html_and_cards(self):
        """HTML 조각과 카드가 순서대로 렌더링."""
        post = _post("<p>a</p>[Card Block ID: x]<p>b</p>", card_ids=["x"])
        blocks = await render_post(post, _fake_card)
        assert blocks == [
            {"type": "html", "html": "<p>a</p>"},
            {"type": "card", "card_id": "x", "card": {"id": "x", "title": "Card x"}},
            {"type": "html", "html": "<p>b</p>"},
        ]

    async def test_media_swapped_in_order(self):
        """미디어는 세그먼트를 넘어 순서대로 교체."""
        post = _post(
            '<img src="old1.jpg"><p>t</p>[Card Block ID: c]<video src="old2.mp4"></video>',
            media=[_media("/new1.jpg", alt=""), _media("/new2.mp4", type="video")],
            card_ids=["c"],
        )
        blocks = await render_post(post, _fake_card)
        assert blocks[0]["html"] == '<img src="/new1.jpg" alt="Post image" /><p>t</p>'
        assert blocks[2]["html"] == '<video src="/new2.mp4" controls></video>'

    async def test_extra_media_elements_left_alone(self):
        """저장된 미디어보다 요소가 많으면 나머지는 원본 유지."""
        post = _post('<img src="a.jpg"><img src="b.jpg">', media=[_media("/x.jpg", alt="X")])
        blocks = await render_post(post, _fake_card)
        assert blocks[0]["html"] == '<img src="/x.jpg" alt="X" /><img src="b.jpg">'

    async def test_out_of_range_placeholder_skipped(self):
        """카드 블록보다 플레이스홀더가 많으면 건너뜀."""
        post = _post("[Card Block ID: a][Card Block ID: b]", card_ids=["a"])
        blocks = await render_post(post, _fake_card)
        assert blocks == [{"type": "card", "card_id": "a", "card": {"id": "a", "title": "Card a"}}]

    async def test_card_matched_by_position_not_placeholder_text(self):
        """n 번째 플레이스홀더는 n 번째 카드 블록."""
        post = _post("[Card Block ID: stale]", card_ids=["fresh"])
        blocks = await render_post(post, _fake_card)
        assert blocks[0]["card_id"] == "fresh"

    async def test_empty_content(self):
        assert await render_post(_post(""), _fake_card) == []

    async def test_video_without_src_keeps_alignment(self):
        """src 없는 <video> 는 저장/렌더링 모두에서 미디어가 아님."""
        prepared = prepare_content(
            '<video><source src="/clip.mp4"></video><p>t</p><img src="/photo.jpg" alt="P">'
        )
        assert [m["url"] for m in prepared.media] == ["/photo.jpg"]

        post = _post(prepared.content, media=[_media(**m) for m in prepared.media])
        blocks = await render_post(post, _fake_card)
        assert blocks[0]["html"] == (
            '<video><source src="/clip.mp4"></video><p>t</p><img src="/photo.jpg" alt="P" />'
        )

    async def test_card_images_not_stored_as_media(self):
        """카드 내부 이미지는 본문 미디어에서 제외."""
        prepared = prepare_content(
            '<div data-type="card-block" data-card-id="c"><img src="/card.jpg"></div>'
            '<p>x</p><img src="/body.jpg">'
        )
        assert [m["url"] for m in prepared.media] == ["/body.jpg"]

        post = _post(
            prepared.content,
            media=[_media(**m) for m in prepared.media],
            card_ids=[b["card_id"] for b in prepared.card_blocks],
        )
        blocks = await render_post(post, _fake_card)
        assert blocks[0]["card_id"] == "c"
        assert blocks[1]["html"] == '<p>x</p><img src="/body.jpg" alt="Body" />'
