from pathlib import Path
from typing import Optional, Union
import traceback

from fake_useragent import UserAgent
from playwright.sync_api import (
    ElementHandle,
    Error as PWError,
    Frame,
    Page,
    TimeoutError as PWTimeoutError,
    sync_playwright,
)

from .errors import InteractionError, LocatorTimeout
from .grid import Difficulty
from .retry import retry
from .utils import logger

ua = UserAgent()

CONSENT_FRAME = "xpath=//*[@title='SP Consent Message']"
ACCEPT_BUTTON = "xpath=//*[@title='EINVERSTANDEN']"
DIFFICULTY_BUTTON = "xpath=//button[text()='{label}']"
GRID_CONTAINER = ".sodokoGrid"


class ZeitSudokuSession:
    """
    Drives one browser session against sudoku.zeit.de and hands back the
    inner HTML of the puzzle grid.

    Every call to `extract_puzzle_markup` launches a fresh Chromium, clicks
    through the consent dialog, picks the difficulty, captures the grid and
    closes the browser again, whatever happens on the way.
    """

    def __init__(
        self,
        headless: bool = False,
        user_agent: Optional[str] = ua.random,
        locale: str = "de-DE",
        page_url: str = "https://sudoku.zeit.de",
        wait_until: str = "domcontentloaded",
        navigation_timeout_ms: int = 30_000,
        locator_timeout_ms: int = 3_000,
        action_timeout_ms: int = 500,
        hover_attempts: int = 10,
        hover_backoff: float = 0.2,
        screenshot_on_error: Optional[Path] = None,
    ):
        self.headless = headless
        self.user_agent = user_agent
        self.locale = locale
        self.page_url = page_url
        self.wait_until = wait_until
        self.navigation_timeout_ms = navigation_timeout_ms
        self.locator_timeout_ms = locator_timeout_ms
        self.action_timeout_ms = action_timeout_ms
        self.hover_attempts = hover_attempts
        self.hover_backoff = hover_backoff
        self.screenshot_on_error = screenshot_on_error

    def _wait_for(self, scope: Union[Page, Frame], locator: str) -> ElementHandle:
        """Block until `locator` is attached in `scope`, at most locator_timeout_ms."""
        logger.debug("Waiting for %s (timeout=%dms)", locator, self.locator_timeout_ms)
        try:
            element = scope.wait_for_selector(locator, state="attached", timeout=self.locator_timeout_ms)
        except PWTimeoutError as e:
            raise LocatorTimeout(locator, self.locator_timeout_ms) from e
        if element is None:
            raise LocatorTimeout(locator, self.locator_timeout_ms)
        return element

    def _accept_consent(self, page: Page) -> None:
        logger.info("Accepting the consent dialog")
        frame_element = self._wait_for(page, CONSENT_FRAME)
        frame = frame_element.content_frame()
        if frame is None:
            raise InteractionError(f"Element {CONSENT_FRAME!r} is not a frame")

        accept = self._wait_for(frame, ACCEPT_BUTTON)
        # Freshly rendered button, the pointer often lands before it is interactable
        retry(
            lambda: accept.hover(timeout=self.action_timeout_ms),
            max_attempts=self.hover_attempts,
            backoff=self.hover_backoff,
        )
        accept.click()
        logger.info("Consent accepted")

    def _select_difficulty(self, page: Page, difficulty: Difficulty) -> None:
        logger.info("Using Sudoku of level %s ...", difficulty.value)
        button = self._wait_for(page, DIFFICULTY_BUTTON.format(label=difficulty.value))
        button.hover()
        button.click()

    def _save_screenshot(self, page: Optional[Page]) -> None:
        if page is None or self.screenshot_on_error is None:
            return
        try:
            page.screenshot(path=str(self.screenshot_on_error), full_page=True)
            logger.info("Saved error screenshot to %s", self.screenshot_on_error.resolve())
        except PWError as ss_e:
            logger.warning("Failed to take screenshot: %s", ss_e)

    def extract_puzzle_markup(self, difficulty: Difficulty = Difficulty.HARD) -> str:
        """
        Return the inner HTML of the puzzle grid for `difficulty`.

        Raises:
            LocatorTimeout: an expected element did not show up in time.
            RetryExhaustedError: the consent button never became hoverable.
            InteractionError: any other browser failure.

        Failures are only logged at DEBUG here; reporting them is up to the caller.
        """
        with sync_playwright() as p:
            browser = None
            page = None
            try:
                logger.info("Launching Chromium (headless=%s)", self.headless)
                browser = p.chromium.launch(headless=self.headless)

                logger.info("Creating browser context (UA=%s, locale=%s)", self.user_agent, self.locale)
                context = browser.new_context(user_agent=self.user_agent, locale=self.locale)
                page = context.new_page()

                logger.info(
                    "Navigating to %s (wait_until=%s, timeout=%dms)",
                    self.page_url, self.wait_until, self.navigation_timeout_ms,
                )
                page.goto(self.page_url, wait_until=self.wait_until, timeout=self.navigation_timeout_ms)

                self._accept_consent(page)
                self._select_difficulty(page, difficulty)

                markup = self._wait_for(page, GRID_CONTAINER).inner_html()
                logger.info("Captured grid markup (%d chars)", len(markup))
                return markup

            except PWError as e:
                self._save_screenshot(page)
                logger.debug("Full traceback:\n%s", traceback.format_exc())
                raise InteractionError(f"Browser interaction failed: {e}") from e
            except Exception as e:
                self._save_screenshot(page)
                logger.debug("Extraction aborted: %s: %s", type(e).__name__, e)
                logger.debug("Full traceback:\n%s", traceback.format_exc())
                raise
            finally:
                if browser:
                    logger.info("Closing browser")
                    browser.close()
                    logger.info("Browser closed")
