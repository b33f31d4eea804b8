"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..ai import AspectRatio, Difficulty, ImageSize, Intensity, SummaryStyle, pcm_to_wav
from ..chat import ChatController
from ..errors import ThinkMateError
from ..history import Attachment, ChatHistoryStore, Message, Role
from ..theme import FontFamily, FontSize, ThemeColor, UIStyle
from ..tools import (
    CREATIVE_TOOLS,
    HistoryBrowser,
    ImageEditor,
    ImageGenerator,
    QuizSession,
    StudyPlanner,
    Summarizer,
    VideoAnalyzer,
    VideoGenerator,
    run_creative_tool,
)
from ..tools.quiz import QuizStatus
from .providers import (
    get_auth_manager,
    get_data_dir,
    get_history,
    get_store,
    get_theme_manager,
    require_ai_service,
    setup_logging,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="thinkmate",
    help="ThinkMate AI: a study buddy for chat, quizzes, summaries and media tools",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_WORDS = {"exit", "quit", "/exit", "/quit"}


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (overrides THINKMATE_LOG_LEVEL)"
    )
):
    """ThinkMate AI command line."""
    setup_logging(log_level)


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(code=1)


def _print_message(message: Message) -> None:
    if message.role == Role.SYSTEM:
        console.print(f"[red]{message.text}[/red]")
    elif message.role == Role.MODEL:
        console.print(Panel(Markdown(message.text), title="ThinkMate", border_style="cyan"))
    else:
        console.print(f"[bold]You:[/bold] {message.text}")


async def _open_controller(history: ChatHistoryStore, session_id: str | None) -> ChatController:
    ai = require_ai_service(console)
    if session_id:
        session = await history.get_session(session_id)
        if session is None:
            _fail(f"No chat session with id {session_id}")
        return ChatController.resume(ai, session, history)
    return ChatController(ai, history)


# ----------------------------------------------------------------------
# Chat
# ----------------------------------------------------------------------

@app.command()
def chat(
    message: str | None = typer.Argument(
        None,
        help="Message to send (omit for an interactive session)"
    ),
    attach: Path | None = typer.Option(
        None,
        "--attach",
        "-a",
        exists=True,
        dir_okay=False,
        help="File to attach to the first message"
    ),
    session_id: str | None = typer.Option(
        None,
        "--session",
        "-s",
        help="Resume a stored chat session"
    )
):
    """Chat with the ThinkMate tutor."""
    async def _chat():
        history = get_history()
        await history.connect()
        try:
            controller = await _open_controller(history, session_id)
            if attach:
                controller.attach_file(attach)
                console.print(f"[dim]Attached {attach.name}[/dim]")

            if message is not None:
                reply = await controller.send_message(message)
                if reply is None:
                    console.print("[yellow]Nothing to send.[/yellow]")
                else:
                    _print_message(reply)
                return

            for existing in controller.messages:
                _print_message(existing)
            console.print("[dim]Type /attach <path> to attach a file, 'exit' to quit.[/dim]")
            while True:
                text = console.input("[bold green]> [/bold green]").strip()
                if text.lower() in EXIT_WORDS:
                    break
                if text.startswith("/attach "):
                    try:
                        attachment = controller.attach_file(text.removeprefix("/attach ").strip())
                    except OSError as e:
                        console.print(f"[red]Error: {e}[/red]")
                        continue
                    console.print(f"[dim]Attached {attachment.name}[/dim]")
                    continue
                with console.status("[dim]ThinkMate is thinking...[/dim]"):
                    reply = await controller.send_message(text)
                if reply is not None:
                    _print_message(reply)
        except (EOFError, KeyboardInterrupt):
            console.print()
        finally:
            await history.disconnect()

    asyncio.run(_chat())


@app.command()
def tui(
    session_id: str | None = typer.Option(
        None,
        "--session",
        "-s",
        help="Resume a stored chat session"
    )
):
    """Launch the interactive Textual interface."""
    from ..ui import run_textual_tui

    async def _tui():
        store = get_store()
        history = get_history(store)
        await history.connect()
        try:
            controller = await _open_controller(history, session_id)
            await run_textual_tui(controller, get_theme_manager(store), audio_dir=get_data_dir() / "audio")
        finally:
            await history.disconnect()

    asyncio.run(_tui())


# ----------------------------------------------------------------------
# Study tools
# ----------------------------------------------------------------------

@app.command()
def quiz(
    topic: str = typer.Argument(..., help="Quiz topic"),
    difficulty: Difficulty = typer.Option(
        Difficulty.MEDIUM,
        "--difficulty",
        "-d",
        case_sensitive=False,
        help="Question difficulty"
    ),
    count: int = typer.Option(
        5,
        "--count",
        "-n",
        min=1,
        help="Number of questions (5, 10 or 15 recommended)"
    )
):
    """Take a generated multiple-choice quiz."""
    async def _quiz():
        session = QuizSession(require_ai_service(console))
        with console.status("[dim]Generating quiz...[/dim]"):
            started = await session.start(topic, difficulty, count)
        if not started:
            _fail(session.error or "Topic must not be empty")

        while session.status == QuizStatus.ACTIVE:
            question = session.current_question
            console.print(
                f"\n[bold]Question {session.current_index + 1}/{session.total}:[/bold] {question.question}"
            )
            for number, option in enumerate(question.options, 1):
                console.print(f"  {number}. {option}")
            choice = typer.prompt("Your answer", type=int)
            while not 1 <= choice <= len(question.options):
                choice = typer.prompt(f"Pick 1-{len(question.options)}", type=int)
            session.select(question.options[choice - 1])
            if session.check():
                console.print("[green]Correct![/green]")
            else:
                console.print(f"[red]Incorrect.[/red] Answer: {question.answer}")
            if question.explanation:
                console.print(f"[dim]{question.explanation}[/dim]")
            session.next()

        console.print(
            Panel(
                f"Score: {session.score}/{session.total} ({session.percentage}%)",
                title="Quiz complete",
                border_style="green",
            )
        )

    asyncio.run(_quiz())


def _read_source(source: str) -> str:
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # inline text longer than a file name allows
        is_file = False
    if is_file:
        return path.read_text(encoding="utf-8")
    return source


@app.command()
def summarize(
    source: str = typer.Argument(..., help="Text to summarize, or a path to a text file"),
    style: SummaryStyle = typer.Option(
        SummaryStyle.BULLET,
        "--style",
        "-s",
        case_sensitive=False,
        help="Summary style"
    )
):
    """Summarize notes or text."""
    async def _summarize():
        summarizer = Summarizer(require_ai_service(console))
        with console.status("[dim]Summarizing...[/dim]"):
            summary = await summarizer.run(_read_source(source), style)
        if summary is None:
            _fail("Nothing to summarize")
        console.print(Markdown(summary))

    asyncio.run(_summarize())


@app.command()
def plan(
    topic: str = typer.Argument(..., help="Subject or exam to plan for"),
    days: int = typer.Option(3, "--days", "-d", min=1, help="Number of days"),
    intensity: Intensity = typer.Option(
        Intensity.MEDIUM,
        "--intensity",
        "-i",
        case_sensitive=False,
        help="Daily study load"
    )
):
    """Build a day-by-day study plan."""
    async def _plan():
        planner = StudyPlanner(require_ai_service(console))
        with console.status("[dim]Planning...[/dim]"):
            result = await planner.run(topic, days, intensity)
        if result is None:
            _fail("Topic must not be empty")
        console.print(Markdown(result))

    asyncio.run(_plan())


@app.command()
def creative(
    tool: str | None = typer.Argument(None, help=f"Tool id ({', '.join(CREATIVE_TOOLS)})"),
    topic: str | None = typer.Argument(None, help="Topic to apply the tool to")
):
    """Run a creative learning tool (omit arguments to list tools)."""
    if tool is None:
        table = Table(title="Creative Tools")
        table.add_column("Id", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Description")
        for item in CREATIVE_TOOLS.values():
            table.add_row(item.id, item.name, item.description)
        console.print(table)
        return
    if tool not in CREATIVE_TOOLS:
        _fail(f"Unknown tool: {tool}. Available: {', '.join(CREATIVE_TOOLS)}")
    if not topic or not topic.strip():
        _fail("Topic must not be empty")

    async def _creative():
        with console.status(f"[dim]{CREATIVE_TOOLS[tool].name}...[/dim]"):
            result = await run_creative_tool(require_ai_service(console), tool, topic)
        console.print(Markdown(result or ""))

    asyncio.run(_creative())


# ----------------------------------------------------------------------
# Audio
# ----------------------------------------------------------------------

@app.command()
def transcribe(
    audio: Path = typer.Argument(..., exists=True, dir_okay=False, help="Audio file to transcribe")
):
    """Transcribe an audio recording."""
    async def _transcribe():
        attachment = Attachment.from_path(audio)
        service = require_ai_service(console)
        with console.status("[dim]Transcribing...[/dim]"):
            text = await service.transcribe_audio(attachment.raw_bytes(), attachment.mime_type)
        if not text:
            _fail("No speech could be transcribed")
        console.print(text)

    asyncio.run(_transcribe())


@app.command()
def speak(
    text: str = typer.Argument(..., help="Text to read aloud"),
    output: Path = typer.Option(Path("thinkmate-speech.wav"), "--output", "-o", help="WAV file to write")
):
    """Synthesize speech and save it as a WAV file."""
    if not text.strip():
        _fail("Text must not be empty")

    async def _speak():
        service = require_ai_service(console)
        with console.status("[dim]Generating speech...[/dim]"):
            pcm = await service.generate_speech(text)
        if pcm is None:
            _fail("Speech generation failed")
        output.write_bytes(pcm_to_wav(pcm))
        console.print(f"[green]Saved audio to {output}[/green]")

    asyncio.run(_speak())


# ----------------------------------------------------------------------
# Images and video
# ----------------------------------------------------------------------

@app.command()
def image(
    prompt: str = typer.Argument(..., help="Image description"),
    size: ImageSize = typer.Option(ImageSize.STANDARD, "--size", help="Requested image size"),
    output: Path = typer.Option(Path("thinkmate-image.png"), "--output", "-o", help="Image file to write")
):
    """Generate an educational illustration."""
    async def _image():
        generator = ImageGenerator(require_ai_service(console))
        with console.status("[dim]Generating image...[/dim]"):
            data = await generator.run(prompt, size)
        if data is None:
            _fail(generator.error or "Prompt must not be empty")
        output.write_bytes(data)
        console.print(f"[green]Saved image to {output}[/green]")

    asyncio.run(_image())


@app.command("edit-image")
def edit_image(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image to edit"),
    prompt: str = typer.Argument(..., help="Edit instruction"),
    mode: str = typer.Option(
        "free",
        "--mode",
        "-m",
        help="Edit mode: free, object-removal, filter, style"
    ),
    output: Path = typer.Option(Path("thinkmate-edited.png"), "--output", "-o", help="Image file to write")
):
    """Edit an image with a text instruction."""
    async def _edit():
        editor = ImageEditor(require_ai_service(console))
        try:
            with console.status("[dim]Editing image...[/dim]"):
                data = await editor.run(Attachment.from_path(source), prompt, mode)
        except ValueError as e:
            _fail(str(e))
        if data is None:
            _fail(editor.error or "Prompt must not be empty")
        output.write_bytes(data)
        console.print(f"[green]Saved image to {output}[/green]")

    asyncio.run(_edit())


@app.command()
def video(
    prompt: str = typer.Argument(..., help="Video description"),
    aspect_ratio: AspectRatio = typer.Option(
        AspectRatio.LANDSCAPE,
        "--aspect-ratio",
        "-r",
        help="Video aspect ratio"
    ),
    max_wait: float | None = typer.Option(
        None,
        "--max-wait",
        help="Give up after this many seconds (default: wait until done)"
    )
):
    """Generate a short educational video and print its download URL."""
    async def _video():
        generator = VideoGenerator(require_ai_service(console), max_wait=max_wait)
        with console.status("[dim]Generating video (this can take a few minutes)...[/dim]"):
            url = await generator.run(prompt, aspect_ratio)
        if url is None:
            _fail(generator.error or "Prompt must not be empty")
        console.print(f"[green]Video ready:[/green] {url}")

    asyncio.run(_video())


@app.command("analyze-video")
def analyze_video(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Video file to analyze"),
    prompt: str | None = typer.Option(None, "--prompt", "-p", help="Analysis instruction")
):
    """Analyze a lecture or tutorial video."""
    async def _analyze():
        analyzer = VideoAnalyzer(require_ai_service(console))
        attachment = Attachment.from_path(source)
        with console.status("[dim]Analyzing video...[/dim]"):
            if prompt:
                result = await analyzer.run(attachment, prompt)
            else:
                result = await analyzer.run(attachment)
        console.print(Markdown(result or ""))

    asyncio.run(_analyze())


# ----------------------------------------------------------------------
# History
# ----------------------------------------------------------------------

@app.command()
def history(
    open_id: str | None = typer.Option(None, "--open", help="Show a stored session"),
    delete_id: str | None = typer.Option(None, "--delete", help="Delete a stored session"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Show at most N sessions")
):
    """List, show or delete past chat sessions."""
    async def _history():
        store = get_history()
        await store.connect()
        try:
            browser = HistoryBrowser(store)
            if delete_id:
                if not await browser.delete(delete_id):
                    _fail(f"No chat session with id {delete_id}")
                console.print(f"[green]Deleted session {delete_id}[/green]")
                return

            if open_id:
                session = await browser.open(open_id)
                if session is None:
                    _fail(f"No chat session with id {open_id}")
                for message in session.messages:
                    _print_message(message)
                return

            previews = await browser.previews(limit)
            if not previews:
                console.print("[dim]No chat history yet.[/dim]")
                return
            table = Table(title="Chat History")
            table.add_column("Id", style="cyan")
            table.add_column("Date", style="dim")
            table.add_column("Messages", justify="right")
            table.add_column("Summary")
            for preview in previews:
                table.add_row(
                    preview.id,
                    preview.timestamp.strftime("%Y-%m-%d %H:%M"),
                    str(preview.message_count),
                    preview.summary,
                )
            console.print(table)
        except ThinkMateError as e:
            _fail(str(e))
        finally:
            await store.disconnect()

    asyncio.run(_history())


# ----------------------------------------------------------------------
# Preferences
# ----------------------------------------------------------------------

@app.command()
def theme(
    dark: bool | None = typer.Option(None, "--dark/--light", help="Set dark or light mode"),
    toggle: bool = typer.Option(False, "--toggle-dark", help="Toggle dark mode"),
    color: ThemeColor | None = typer.Option(None, "--color", "-c", help="Colour theme"),
    font: FontFamily | None = typer.Option(None, "--font", "-f", help="Font family"),
    size: FontSize | None = typer.Option(None, "--size", "-s", help="Font size"),
    style: UIStyle | None = typer.Option(None, "--style", help="UI style"),
    reset: bool = typer.Option(False, "--reset", help="Restore defaults")
):
    """Show or change the appearance preference."""
    manager = get_theme_manager()
    try:
        if reset:
            manager.reset()
        if toggle:
            manager.toggle_dark_mode()
        elif dark is not None and dark != manager.preference.is_dark_mode:
            manager.toggle_dark_mode()
        if color:
            manager.set_color_theme(color)
        if font:
            manager.set_font_family(font)
        if size:
            manager.set_font_size(size)
        if style:
            manager.set_ui_style(style)
    except ThinkMateError as e:
        _fail(str(e))

    preference = manager.preference
    table = Table(title="Theme")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Dark mode", "on" if preference.is_dark_mode else "off")
    table.add_row("Colour", preference.color_theme.value)
    table.add_row("Font", preference.font_family.value)
    table.add_row("Font size", preference.font_size.value)
    table.add_row("UI style", preference.ui_style.value)
    table.add_row("Rendered dark", "yes" if manager.style.is_dark else "no")
    console.print(table)


# ----------------------------------------------------------------------
# Account
# ----------------------------------------------------------------------

@app.command()
def login(
    email: str = typer.Argument(..., help="Email address"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password")
):
    """Sign in (demo account, no server)."""
    auth = get_auth_manager()
    if not asyncio.run(auth.login(email, password)):
        _fail("Please enter a valid email address")
    console.print(f"[green]Welcome back, {auth.user.name}![/green]")


@app.command()
def signup(
    email: str = typer.Argument(..., help="Email address"),
    name: str = typer.Option(..., "--name", "-n", prompt=True, help="Display name"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    )
):
    """Create an account (demo account, no server)."""
    auth = get_auth_manager()
    asyncio.run(auth.signup(email, name, password))
    console.print(f"[green]Account created. Welcome, {auth.user.name}![/green]")


@app.command()
def logout():
    """Sign out."""
    get_auth_manager().logout()
    console.print("[dim]Signed out.[/dim]")


@app.command()
def whoami():
    """Show the signed-in user."""
    auth = get_auth_manager()
    if not auth.is_authenticated:
        console.print("[yellow]Not signed in.[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[bold]{auth.user.name}[/bold] <{auth.user.email}>")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
