"""Client-side accessibility controller and per-mode stylesheets.

The controller script is the only script a transformed page carries.  It
reacts to two kinds of cross-frame message from the embedding host:

``"REQUEST_READABLE_TEXT"``
    Reply to the sender with ``{type: "READABLE_TEXT", text: ...}``.
``"FOCUS_ON"`` / ``"FOCUS_OFF"``
    Pause or resume motion on the page: playing media, animated GIFs, and
    CSS animations/transitions.  State lives in one object (``pausedMedia``
    set, ``frozenImages`` map) so repeated toggles are idempotent and only
    what focus mode itself paused is ever resumed.
"""

from __future__ import annotations

from gateway.scraper.document import HtmlDocument
from gateway.scraper.models import Mode

SCRIPT_ID = "gateway-accessibility"
FOCUS_STYLE_ID = "gateway-focus-style"

ACCESSIBILITY_SCRIPT = r"""
(function () {
  var FOCUS_STYLE_ID = '%(focus_style_id)s';
  var state = {
    pausedMedia: new Set(),
    frozenImages: new Map(),
    focusStyle: null
  };

  function readableText() {
    return document.body ? document.body.innerText : '';
  }

  function isAnimated(img) {
    var src = (img.currentSrc || img.src || '').toLowerCase();
    return /\.gif($|[?#])/.test(src) || src.indexOf('data:image/gif') === 0;
  }

  function pauseMedia() {
    document.querySelectorAll('video, audio').forEach(function (media) {
      if (media.paused || state.pausedMedia.has(media)) return;
      media.pause();
      state.pausedMedia.add(media);
    });
  }

  function resumeMedia() {
    state.pausedMedia.forEach(function (media) {
      var played = media.play();
      if (played && typeof played.catch === 'function') played.catch(function () {});
    });
    state.pausedMedia.clear();
  }

  function freezeImages() {
    document.querySelectorAll('img').forEach(function (img) {
      if (state.frozenImages.has(img) || !isAnimated(img)) return;
      try {
        var canvas = document.createElement('canvas');
        canvas.width = img.naturalWidth || img.width;
        canvas.height = img.naturalHeight || img.height;
        var ctx = canvas.getContext('2d');
        if (!ctx) return;
        ctx.drawImage(img, 0, 0);
        var still = canvas.toDataURL();
        state.frozenImages.set(img, img.src);
        img.src = still;
      } catch (err) {
        // Cross-origin images taint the canvas; leave them animated.
      }
    });
  }

  function thawImages() {
    state.frozenImages.forEach(function (originalSrc, img) {
      img.src = originalSrc;
    });
    state.frozenImages.clear();
  }

  function haltAnimations() {
    if (state.focusStyle) return;
    var style = document.createElement('style');
    style.id = FOCUS_STYLE_ID;
    style.textContent =
      '*, *::before, *::after {' +
      '  animation-play-state: paused !important;' +
      '  transition: none !important;' +
      '}';
    (document.head || document.documentElement).appendChild(style);
    state.focusStyle = style;
  }

  function resumeAnimations() {
    if (!state.focusStyle) return;
    state.focusStyle.remove();
    state.focusStyle = null;
  }

  function focusOn() {
    pauseMedia();
    freezeImages();
    haltAnimations();
  }

  function focusOff() {
    resumeMedia();
    thawImages();
    resumeAnimations();
  }

  window.addEventListener('message', function (event) {
    var data = event.data;
    if (data === 'REQUEST_READABLE_TEXT') {
      if (event.source) {
        event.source.postMessage(
          { type: 'READABLE_TEXT', text: readableText() },
          event.origin && event.origin !== 'null' ? event.origin : '*'
        );
      }
    } else if (data === 'FOCUS_ON' || data === 'EQUINET_FOCUS_ON') {
      focusOn();
    } else if (data === 'FOCUS_OFF' || data === 'EQUINET_FOCUS_OFF') {
      focusOff();
    }
  });
})();
""" % {"focus_style_id": FOCUS_STYLE_ID}


# ---------------------------------------------------------------------------
# Mode stylesheets
# ---------------------------------------------------------------------------

_OPEN_DYSLEXIC_CDN = "https://cdn.jsdelivr.net/gh/antijingoist/open-dyslexic@master/compiled"

DYSLEXIA_STYLE = f"""
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<style>
  @font-face {{
    font-family: 'OpenDyslexic';
    src: url('{_OPEN_DYSLEXIC_CDN}/OpenDyslexic-Regular.otf') format('opentype');
    font-weight: normal;
    font-style: normal;
  }}
  @font-face {{
    font-family: 'OpenDyslexic';
    src: url('{_OPEN_DYSLEXIC_CDN}/OpenDyslexic-Bold.otf') format('opentype');
    font-weight: bold;
    font-style: normal;
  }}
  @font-face {{
    font-family: 'OpenDyslexic';
    src: url('{_OPEN_DYSLEXIC_CDN}/OpenDyslexic-Italic.otf') format('opentype');
    font-weight: normal;
    font-style: italic;
  }}

  *, *::before, *::after {{
    font-family: 'OpenDyslexic', 'Arial', sans-serif !important;
  }}

  body {{
    background: #fdf6e3 !important;
    color: #1a1a1a !important;
    max-width: 800px !important;
    margin: 0 auto !important;
    padding: 2rem !important;
  }}

  p, li, td, dd, span, div {{
    font-size: 1.15rem !important;
    line-height: 1.8 !important;
    letter-spacing: 0.03em !important;
    word-spacing: 0.08em !important;
  }}

  h1 {{ font-size: 2rem !important; line-height: 1.4 !important; margin-bottom: 1rem !important; }}
  h2 {{ font-size: 1.6rem !important; line-height: 1.4 !important; }}
  h3 {{ font-size: 1.3rem !important; line-height: 1.4 !important; }}

  a {{ color: #1a0dab !important; text-decoration: underline !important; }}
  a:visited {{ color: #551a8b !important; }}

  p {{ max-width: 70ch !important; }}

  * {{ background-image: none !important; }}
  body, main, article, section, div {{
    background-color: transparent !important;
  }}
  body {{ background-color: #fdf6e3 !important; }}

  /* ruler shading on alternate paragraphs for line tracking */
  p:nth-child(odd) {{
    background-color: rgba(0,0,0,0.025) !important;
    padding: 4px 8px !important;
    border-radius: 4px !important;
  }}
</style>
"""

SIMPLIFIED_STYLE = """
<style>
  body { font-family: Georgia, serif !important; line-height: 1.8 !important; background: #fff !important; padding: 1.5rem !important; margin: 0 auto !important; max-width: 850px !important; }
  p, li, td, dd { font-size: 1.15rem !important; color: #1a1a1a !important; margin-bottom: 1.2rem !important; }
  h1 { font-size: 2rem !important; margin-bottom: 1.5rem !important; }
  h2 { font-size: 1.6rem !important; margin-top: 2rem !important; }
  h3 { font-size: 1.3rem !important; }
  a { color: #1d4ed8 !important; text-decoration: underline !important; }
  img { max-width: 100% !important; height: auto !important; border-radius: 8px !important; }
</style>
"""

TRANSLATED_STYLE = """
<link rel="preconnect" href="https://fonts.googleapis.com">
<link href="https://fonts.googleapis.com/css2?family=Noto+Sans+Tamil&display=swap" rel="stylesheet">
<style>
  body { font-family: 'Noto Sans Tamil', 'Latha', sans-serif !important; line-height: 2 !important; }
  p, li, td { font-size: 1.15rem !important; color: #1a1a1a !important; }
</style>
"""

MODE_STYLES = {
    Mode.DYSLEXIA: DYSLEXIA_STYLE,
    Mode.SIMPLIFIED: SIMPLIFIED_STYLE,
    Mode.TRANSLATED: TRANSLATED_STYLE,
}


def inject_mode_styles(doc: HtmlDocument, mode: Mode) -> bool:
    """Append the stylesheet for *mode* to ``<head>``.

    Returns:
        ``True`` if a stylesheet was added (``original`` adds none).
    """
    markup = MODE_STYLES.get(mode)
    if markup is None:
        return False
    doc.append_markup(doc.ensure_head(), markup)
    return True


def inject_accessibility_script(doc: HtmlDocument) -> None:
    """Append the accessibility controller script to the end of the body."""
    script = doc.new_tag("script", id=SCRIPT_ID)
    script.string = ACCESSIBILITY_SCRIPT
    doc.body().append(script)
