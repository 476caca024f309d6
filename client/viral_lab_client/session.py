import logging
from pathlib import Path
from typing import Optional, Union

from video_analysis.schemas import AnalysisResult, RemixVariables

from .client import ViralLabClient
from .encoding import is_video_file
from .exceptions import NoAnalysisError, UnsupportedFileError

logger = logging.getLogger(__name__)


class ViralLabSession:
    """
    Client-side state for one review and remix flow.

    A failed call never touches what the session already holds. Selecting a new
    video or a new successful analysis discards the previous result and script.
    """

    def __init__(self, client: ViralLabClient):
        self.client = client
        self.selected_video: Optional[Path] = None
        self.analysis: Optional[AnalysisResult] = None
        self.script: Optional[str] = None

    def select_video(self, video_path: Union[str, Path]) -> None:
        video_path = Path(video_path)
        if not is_video_file(video_path):
            raise UnsupportedFileError(f"{video_path.name} is not a video file.")
        self.selected_video = video_path
        self.analysis = None
        self.script = None

    async def analyze(self) -> AnalysisResult:
        if self.selected_video is None:
            raise UnsupportedFileError("Select a video before analyzing.")
        analysis = await self.client.analyze_viral_video(self.selected_video)
        self.analysis = analysis
        self.script = None
        return analysis

    async def remix(self, variables: RemixVariables) -> str:
        if self.analysis is None:
            raise NoAnalysisError("Analyze a video before remixing it.")
        script = await self.client.generate_remix_script(self.analysis, variables)
        self.script = script
        return script

    def reset(self) -> None:
        self.selected_video = None
        self.analysis = None
        self.script = None
