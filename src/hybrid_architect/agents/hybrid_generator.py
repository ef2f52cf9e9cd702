"""Generates one file from concurrent cloud and local candidates."""

from concurrent.futures import ThreadPoolExecutor

from loguru import logger

from hybrid_architect.agents.cloud_generator import CloudGenerator
from hybrid_architect.agents.local_generator import LocalGenerator
from hybrid_architect.models import SynthesisResult
from hybrid_architect.synthesis import synthesize


class HybridFileGenerator:
    """Requests both candidates in parallel, then synthesizes them."""

    def __init__(self, cloud: CloudGenerator, local: LocalGenerator) -> None:
        self.cloud = cloud
        self.local = local

    def generate(self, file_path: str, prompt: str, context: str = "") -> SynthesisResult:
        """Produce the synthesized content for one planned file.

        Both generator calls run concurrently and synthesis waits for both.

        Raises:
            GenerationError: If the cloud provider chain fails. The local
                generator never raises.
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            cloud_future = executor.submit(self.cloud.generate, file_path, prompt, context)
            local_future = executor.submit(self.local.generate, file_path, prompt)
            local_text = local_future.result()
            cloud_text = cloud_future.result()

        logger.debug(
            f"{file_path}: cloud={len(cloud_text or '')} chars, "
            f"local={len(local_text or '')} chars"
        )
        return synthesize(cloud_text, local_text)
