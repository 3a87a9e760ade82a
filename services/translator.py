from concurrent.futures import ThreadPoolExecutor, as_completed
from config import settings
from services.completion import CompletionService
from services.database import DatabaseService
from models.content import Experience, Project
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = {
    "en": "English",
    "ko": "Korean",
    "de": "German",
    "nl": "Dutch",
}
DEFAULT_LANGUAGE = "en"

TRANSLATOR_SYSTEM_PROMPT = """You are a professional translator. Translate the given text to {language} while maintaining:
1. Natural, fluent language that sounds native
2. Professional tone appropriate for a portfolio/resume context
3. Technical terms should be appropriately localized
4. Personal names should remain unchanged
5. Keep the same structure and formatting
{context_line}
Respond only with the translated text, no explanations or additional content."""


class Translator:
    """Translates replies and record text, with a persistent cache.

    Translation is never fatal: any failure returns the original text.
    """

    def __init__(
        self,
        completion: CompletionService,
        db: Optional[DatabaseService] = None,
        max_workers: int = 4,
    ):
        self.completion = completion
        self.db = db
        self.max_workers = max_workers

    def translate_text(self, text: str, target_language: str, context: Optional[str] = None) -> str:
        """Translate `text` into `target_language`, falling back to the original"""
        if not text or not target_language or target_language == DEFAULT_LANGUAGE:
            return text

        cached = self._get_cached(text, target_language, context)
        if cached is not None:
            return cached

        language_name = SUPPORTED_LANGUAGES.get(target_language, target_language)
        system = TRANSLATOR_SYSTEM_PROMPT.format(
            language=language_name,
            context_line=f"\nContext: {context}\n" if context else "",
        )

        try:
            translated = self.completion.complete(
                system=system,
                user_message=text,
                max_tokens=settings.TRANSLATION_MAX_TOKENS,
                temperature=settings.TRANSLATION_TEMPERATURE,
                purpose=f"translation to {target_language}",
            )
        except Exception as e:
            logger.error(f"Translation to {target_language} failed, returning original text: {e}")
            return text

        translated = translated or text
        self._store(text, translated, target_language, context)
        return translated

    def translate_records(
        self,
        target_language: str,
        projects: Optional[List[Project]] = None,
        experiences: Optional[List[Experience]] = None,
    ) -> Tuple[Optional[List[Project]], Optional[List[Experience]]]:
        """Translate detailedContent of every record concurrently

        Records are independent, so calls are issued together and all must
        finish. If the batch itself breaks, the untranslated records are returned.
        """
        if target_language == DEFAULT_LANGUAGE:
            return projects, experiences

        jobs = []
        for index, project in enumerate(projects or []):
            if project.detailed_content:
                jobs.append(("project", index, project.detailed_content, "project detailed content"))
        for index, experience in enumerate(experiences or []):
            if experience.detailed_content:
                jobs.append(("experience", index, experience.detailed_content, "experience detailed content"))

        if not jobs:
            return projects, experiences

        translated_projects = list(projects) if projects is not None else None
        translated_experiences = list(experiences) if experiences is not None else None

        def translate(job):
            kind, index, text, context = job
            return kind, index, self.translate_text(text, target_language, context)

        try:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [executor.submit(translate, job) for job in jobs]
                for future in as_completed(futures):
                    kind, index, text = future.result()
                    if kind == "project":
                        translated_projects[index] = translated_projects[index].model_copy(
                            update={"detailed_content": text}
                        )
                    else:
                        translated_experiences[index] = translated_experiences[index].model_copy(
                            update={"detailed_content": text}
                        )
        except Exception as e:
            logger.error(f"Record translation batch failed: {e}", exc_info=True)
            return projects, experiences

        logger.info(f"Translated {len(jobs)} record(s) to {target_language}")
        return translated_projects, translated_experiences

    def _get_cached(self, text: str, language: str, context: Optional[str]) -> Optional[str]:
        if self.db is None:
            return None
        try:
            cached = self.db.get_cached_translation(text, language, context)
        except Exception as e:
            logger.error(f"Translation cache lookup failed: {e}")
            return None
        return cached.translated_text if cached else None

    def _store(self, original: str, translated: str, language: str, context: Optional[str]):
        if self.db is None:
            return
        try:
            self.db.add_translation({
                "original_text": original,
                "translated_text": translated,
                "language": language,
                "context": context,
            })
        except Exception as e:
            logger.error(f"Failed to cache translation: {e}")
