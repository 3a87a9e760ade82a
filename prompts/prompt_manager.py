import yaml
import os
from pathlib import Path
from typing import Dict, Any, List, Optional
from models.content import Experience, Introduction, KnowledgeEntry, Project
from models.conversation import HistoryTurn
import logging

logger = logging.getLogger(__name__)


class PromptManager:
    """
    Manages prompt templates with hot-reload support

    Loads prompts from YAML files and renders portfolio content into the
    system prompt sent to the completion provider.
    """

    def __init__(self, prompts_dir: Optional[str] = None):
        if prompts_dir is None:
            # Default to prompts/ directory in the same location as this file
            prompts_dir = Path(__file__).parent

        self.prompts_dir = Path(prompts_dir)
        self.cache: Dict[str, Dict[str, Any]] = {}
        logger.info(f"PromptManager initialized with directory: {self.prompts_dir}")

    def get_prompt_config(self, prompt_name: str) -> Dict[str, Any]:
        """
        Load prompt configuration from YAML file with hot-reload support

        Args:
            prompt_name: Name of the prompt file (without .yaml extension)

        Returns:
            Dictionary containing the prompt configuration
        """
        filepath = self.prompts_dir / f"{prompt_name}.yaml"

        if not filepath.exists():
            raise FileNotFoundError(f"Prompt file not found: {filepath}")

        # Get file modification time for hot-reload
        mtime = os.path.getmtime(filepath)

        cache_key = prompt_name

        # Check if we need to reload (file changed or not in cache)
        if cache_key not in self.cache or self.cache[cache_key].get('mtime') != mtime:
            logger.info(f"Loading/reloading prompt: {prompt_name}")
            with open(filepath, 'r') as f:
                config = yaml.safe_load(f)

            self.cache[cache_key] = {
                'data': config,
                'mtime': mtime
            }

        return self.cache[cache_key]['data']

    def build_portfolio_prompt(
        self,
        introduction: Optional[Introduction],
        knowledge: List[KnowledgeEntry],
        projects: List[Project],
        experiences: List[Experience],
        history: List[HistoryTurn],
    ) -> str:
        """
        Build the portfolio system prompt using the YAML configuration

        Args:
            introduction: Active introduction, if any
            knowledge: Active knowledge entries
            projects: All project records
            experiences: All experience records
            history: Windowed prior turns of this session, oldest first

        Returns:
            Complete system prompt; the visitor's question is sent separately
        """
        config = self.get_prompt_config("portfolio_chat")
        section_configs = config.get('context_sections', {})

        sections = [config['system_role'].strip()]

        if introduction and introduction.content.strip():
            sections.append(self._build_introduction(introduction, section_configs.get('introduction', {})))

        if knowledge:
            sections.append(self._build_knowledge(knowledge, section_configs.get('knowledge', {})))

        if projects:
            sections.append(self._build_projects(projects, section_configs.get('projects', {})))

        if experiences:
            sections.append(self._build_experiences(experiences, section_configs.get('experiences', {})))

        if history:
            sections.append(self._build_conversation_history(
                history,
                section_configs.get('conversation_history', {})
            ))

        # Add instructions
        if config.get('instructions'):
            lines = ["INSTRUCTIONS:"]
            for i, instruction in enumerate(config['instructions'], 1):
                lines.append(f"{i}. {instruction}")
            sections.append("\n".join(lines))

        # Add critical guidelines
        if config.get('critical_guidelines'):
            lines = ["CRITICAL:"]
            for guideline in config['critical_guidelines']:
                lines.append(f"- {guideline}")
            sections.append("\n".join(lines))

        sections.append(config['final_instruction'])

        return "\n\n".join(sections)

    def _build_introduction(self, introduction: Introduction, config: Dict) -> str:
        """Build introduction section"""
        lines = [config.get('header', 'About Me:'), introduction.content.strip()]

        profile = [
            ("Name", introduction.name),
            ("Title", introduction.title),
            ("Location", introduction.location),
            ("Experience", introduction.experience),
            ("Technologies", introduction.technologies),
        ]
        for label, value in profile:
            if value:
                lines.append(f"- {label}: {value}")

        return "\n".join(lines)

    def _build_knowledge(self, entries: List[KnowledgeEntry], config: Dict) -> str:
        """Build knowledge section"""
        header = config.get('header', 'Knowledge:')
        format_str = config.get('format', '- {content}')

        lines = [header]
        for entry in entries:
            lines.append(format_str.format(content=entry.content.strip()))

        return "\n".join(lines)

    def _build_projects(self, projects: List[Project], config: Dict) -> str:
        """Build projects section with every field spelled out"""
        lines = [config.get('header', 'Projects:')]
        for i, project in enumerate(projects, 1):
            lines.append(f"{i}. {project.title}")
            lines.append(f"   Period: {project.period or 'N/A'}")
            lines.append(f"   Role: {project.subtitle or 'N/A'}")
            lines.append(f"   Summary: {project.summary or 'N/A'}")
            if project.contents:
                lines.append(f"   Highlights: {'; '.join(project.contents)}")
            lines.append(f"   Tech: {project.tech or 'N/A'}")
            if project.more_link:
                lines.append(f"   Link: {project.more_link}")
            if project.detailed_content:
                lines.append(f"   Details: {project.detailed_content}")

        return "\n".join(lines)

    def _build_experiences(self, experiences: List[Experience], config: Dict) -> str:
        """Build experience section with every field spelled out"""
        lines = [config.get('header', 'Experience:')]
        for i, exp in enumerate(experiences, 1):
            lines.append(f"{i}. {exp.position} at {exp.company}")
            lines.append(f"   Period: {exp.period or 'N/A'}")
            lines.append(f"   Location: {exp.location or 'N/A'}")
            if exp.description:
                lines.append(f"   Description: {exp.description}")
            if exp.responsibilities:
                lines.append(f"   Responsibilities: {'; '.join(exp.responsibilities)}")
            if exp.skills:
                lines.append(f"   Skills: {exp.skills}")
            if exp.website:
                lines.append(f"   Website: {exp.website}")
            if exp.detailed_content:
                lines.append(f"   Details: {exp.detailed_content}")

        return "\n".join(lines)

    def _build_conversation_history(self, history: List[HistoryTurn], config: Dict) -> str:
        """Build conversation history section as alternating Q/A lines"""
        header = config.get('header', 'Conversation History:')
        format_str = config.get('format', 'Q: {question}\nA: {answer}')

        lines = [header]
        for turn in history:
            lines.append(format_str.format(question=turn.question, answer=turn.answer))

        return "\n".join(lines)


# Singleton instance
prompt_manager = PromptManager()
