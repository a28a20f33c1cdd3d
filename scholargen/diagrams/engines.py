"""External diagram rendering engines.

An engine takes a render-target id plus mermaid source and returns SVG
markup, or raises ``DiagramRenderError``. Engines never retry.
"""

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Protocol

import httpx

from scholargen.config import Settings
from scholargen.errors import DiagramRenderError, EngineNotAvailableError

logger = logging.getLogger(__name__)


class DiagramEngine(Protocol):
    """Protocol for diagram engine implementations."""

    name: str

    async def render(self, target_id: str, source: str) -> str:
        """Render mermaid source to SVG.

        Args:
            target_id: Render-target identity, unique per invocation
            source: Mermaid diagram source

        Returns:
            SVG markup

        Raises:
            DiagramRenderError: Source rejected or engine failed
        """
        ...


class KrokiEngine:
    """Engine backed by a Kroki server (https://kroki.io or self-hosted)."""

    name = "kroki"

    def __init__(
        self,
        base_url: str = "https://kroki.io",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Kroki engine.

        Args:
            base_url: Kroki server base URL
            client: Optional httpx client (for testing with mocks)
            timeout: Per-request timeout in seconds for the owned client
        """
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    async def render(self, target_id: str, source: str) -> str:
        """POST the source to /mermaid/svg."""
        url = f"{self._base_url}/mermaid/svg"

        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout)
            close_client = True

        try:
            response = await client.post(
                url,
                content=source.encode("utf-8"),
                headers={"Content-Type": "text/plain", "X-Render-Target": target_id},
            )
        except httpx.TransportError as e:
            raise EngineNotAvailableError(f"Kroki unreachable at {self._base_url}: {e}") from e
        finally:
            if close_client:
                await client.aclose()

        if response.status_code >= 500:
            raise EngineNotAvailableError(f"Kroki returned {response.status_code}")
        if response.status_code != 200:
            # Kroki reports syntax errors as 4xx with a plain-text body
            raise DiagramRenderError(response.text.strip() or f"HTTP {response.status_code}")

        return response.text


class MermaidCliEngine:
    """Engine backed by the mermaid-cli ``mmdc`` binary."""

    name = "mmdc"

    def __init__(
        self,
        mmdc_path: str = "mmdc",
        theme: str = "neutral",
        work_dir: Path | None = None,
    ) -> None:
        """Initialize mermaid-cli engine.

        Args:
            mmdc_path: Path or name of the mmdc executable
            theme: Mermaid theme passed with -t
            work_dir: Shared scratch directory; files are named by target id
        """
        self._mmdc_path = mmdc_path
        self._theme = theme
        self._work_dir = work_dir or Path(tempfile.gettempdir()) / "scholargen-diagrams"

    async def render(self, target_id: str, source: str) -> str:
        """Run mmdc on a scratch file named after the target id."""
        self._work_dir.mkdir(parents=True, exist_ok=True)
        input_path = self._work_dir / f"{target_id}.mmd"
        output_path = self._work_dir / f"{target_id}.svg"
        input_path.write_text(source, encoding="utf-8")

        try:
            try:
                process = await asyncio.create_subprocess_exec(
                    self._mmdc_path,
                    "-i",
                    str(input_path),
                    "-o",
                    str(output_path),
                    "-t",
                    self._theme,
                    "-q",
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as e:
                raise EngineNotAvailableError(f"{self._mmdc_path} not found") from e

            _, stderr = await process.communicate()

            if process.returncode != 0:
                message = stderr.decode("utf-8", errors="replace").strip()
                raise DiagramRenderError(message or f"mmdc exited with {process.returncode}")

            if not output_path.exists():
                raise DiagramRenderError("mmdc produced no output")

            return output_path.read_text(encoding="utf-8")
        finally:
            input_path.unlink(missing_ok=True)
            output_path.unlink(missing_ok=True)


def create_engine_from_settings(settings: Settings) -> DiagramEngine:
    """Build the configured diagram engine."""
    if settings.diagram_engine == "mmdc":
        logger.info(f"Using mermaid-cli diagram engine ({settings.mmdc_path})")
        return MermaidCliEngine(mmdc_path=settings.mmdc_path, theme=settings.diagram_theme)

    logger.info(f"Using Kroki diagram engine ({settings.kroki_url})")
    return KrokiEngine(base_url=settings.kroki_url)
