"""
Publishing of the rendered subtitle page.

Two interchangeable targets are provided: a loopback HTTP server started as
a child process, and a remote static-site deployment driven by an external
command. The pipeline only talks to the PublishTarget interface.
"""
from typing import Optional, Union
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
import socket
import subprocess
import sys
import time

from .config import TranslatorConfig
from .errors import ConfigurationError, PortInUseError, PublishError

PAGE_NAME = "index.html"
DEPLOYMENT_LOG_NAME = "deployment.log"
LOOPBACK_HOST = "127.0.0.1"


@dataclass
class PublishResult:
    """Outcome of a publish call"""
    ok: bool
    url: str
    output: str = ""
    log_path: Optional[Path] = None


def write_page(directory: Union[str, Path], markup: str) -> Path:
    """Write the page into directory/index.html, creating the directory"""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    page_path = directory / PAGE_NAME
    page_path.write_text(markup, encoding="utf-8")
    return page_path


def is_port_in_use(port: int, host: str = LOOPBACK_HOST) -> bool:
    """Check whether a TCP port can still be bound on host"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return True
    return False


class PublishTarget(ABC):
    """Where the rendered page is published and how it is checked"""

    # Whether the published page should be polled for the run id
    verifies_liveness = True

    def __init__(self, config: TranslatorConfig):
        self.config = config

    @abstractmethod
    def publish(self, markup: str) -> PublishResult:
        """Publish the page; fatal problems raise PublishError"""

    @abstractmethod
    def resolve_url(self) -> str:
        """URL of the page as published"""

    @abstractmethod
    def translated_url(self) -> str:
        """URL of the translated mirror of the published page"""

    def teardown(self) -> None:
        """Release anything publish() started"""


class LocalPublishTarget(PublishTarget):
    """Serves the page from a child `python -m http.server` process"""

    def __init__(self, config: TranslatorConfig):
        super().__init__(config)
        self.process: Optional[subprocess.Popen] = None

    @property
    def directory(self) -> Path:
        return self.config.dist_dir

    def resolve_url(self) -> str:
        if self.config.local_serving_url:
            return self.config.local_serving_url
        return f"http://{LOOPBACK_HOST}:{self.config.port}/{PAGE_NAME}"

    def translated_url(self) -> str:
        return self.config.translated_local_url

    def publish(self, markup: str) -> PublishResult:
        port = self.config.port
        if is_port_in_use(port):
            raise PortInUseError(f"Port {port} is already in use, stop the other server first")

        write_page(self.directory, markup)

        cmd = [
            sys.executable, "-m", "http.server", str(port),
            "--bind", LOOPBACK_HOST,
            "--directory", str(self.directory),
        ]
        try:
            self.process = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise PublishError(f"Could not start local server: {e}") from e

        time.sleep(self.config.server_startup_delay)

        if self.process.poll() is not None:
            returncode = self.process.returncode
            self.process = None
            raise PublishError(f"Local server exited during startup with code {returncode}")

        return PublishResult(ok=True, url=self.resolve_url())

    def teardown(self) -> None:
        if self.process is None:
            return
        process, self.process = self.process, None
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()


class RemotePublishTarget(PublishTarget):
    """Publishes the page with an external static-site deploy command"""

    verifies_liveness = False

    def resolve_url(self) -> str:
        return self.config.remote_hosted_url

    def translated_url(self) -> str:
        return self.config.translated_remote_url

    def publish(self, markup: str) -> PublishResult:
        write_page(self.config.site_path, markup)

        try:
            result = subprocess.run(
                self.config.deploy_command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise PublishError(f"Could not run deploy command: {e}") from e

        output = result.stdout or ""
        if self.config.error_marker in output or result.returncode != 0:
            log_path = self.write_log(output)
            return PublishResult(ok=False, url=self.resolve_url(), output=output, log_path=log_path)

        return PublishResult(ok=True, url=self.resolve_url(), output=output)

    def write_log(self, output: str) -> Path:
        self.config.dist_dir.mkdir(parents=True, exist_ok=True)
        log_path = self.config.dist_dir / DEPLOYMENT_LOG_NAME
        log_path.write_text(output, encoding="utf-8")
        return log_path


def create_publish_target(config: TranslatorConfig) -> PublishTarget:
    """Pick the publish target for config.deployment"""
    if config.deployment == "local":
        return LocalPublishTarget(config)
    if config.deployment == "remote":
        return RemotePublishTarget(config)
    raise ConfigurationError(f"Unknown deployment '{config.deployment}'")
