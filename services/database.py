from supabase import create_client, Client
from config import settings
from typing import List, Optional, Dict, Any
from models.content import (
    KnowledgeEntry,
    Project,
    Experience,
    Introduction,
    PromptExample,
    Contact,
    SkillCategory,
    Skill,
    Translation,
)
from models.conversation import ConversationTurn
import logging

logger = logging.getLogger(__name__)

# Table names
TRAINING_DATA = "training_data"
PROJECTS = "projects"
EXPERIENCES = "experiences"
INTRODUCTION = "introduction"
PROMPT_EXAMPLES = "prompt_examples"
CONTACTS = "contacts"
SKILL_CATEGORIES = "skill_categories"
SKILLS = "skills"
CONVERSATIONS = "conversations"
TRANSLATIONS = "translations"


class DatabaseService:
    def __init__(self, client: Optional[Client] = None):
        self.client: Client = client or create_client(
            settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY
        )

    # Generic row access
    def list_rows(
        self,
        table: str,
        order_by: Optional[List[tuple]] = None,
        active_only: bool = False,
    ) -> List[Dict[str, Any]]:
        """List rows of a table

        Args:
            table: Table name
            order_by: [(column, desc)] pairs applied in order
            active_only: Only rows with is_active = true
        """
        query = self.client.table(table).select("*")
        if active_only:
            query = query.eq("is_active", True)
        for column, desc in order_by or []:
            query = query.order(column, desc=desc)
        response = query.execute()
        return response.data or []

    def get_row(self, table: str, row_id: int) -> Optional[Dict[str, Any]]:
        """Get a row by ID"""
        response = self.client.table(table).select("*").eq("id", row_id).limit(1).execute()
        return response.data[0] if response.data else None

    def insert_row(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row, return it as stored"""
        response = self.client.table(table).insert(data).execute()
        return response.data[0]

    def update_row(self, table: str, row_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update a row, return it or None if the ID does not exist"""
        response = self.client.table(table).update(data).eq("id", row_id).execute()
        return response.data[0] if response.data else None

    def delete_row(self, table: str, row_id: int) -> bool:
        """Delete a row, return whether anything was deleted"""
        response = self.client.table(table).delete().eq("id", row_id).execute()
        return bool(response.data)

    # Knowledge entries
    def get_active_training_data(self) -> List[KnowledgeEntry]:
        """Active knowledge entries, newest first"""
        rows = self.list_rows(TRAINING_DATA, order_by=[("timestamp", True)], active_only=True)
        return [KnowledgeEntry(**row) for row in rows]

    # Projects & experiences
    def get_all_projects(self) -> List[Project]:
        rows = self.list_rows(PROJECTS, order_by=[("timestamp", True)])
        return [Project(**row) for row in rows]

    def get_all_experiences(self) -> List[Experience]:
        rows = self.list_rows(EXPERIENCES, order_by=[("timestamp", True)])
        return [Experience(**row) for row in rows]

    # Introduction
    def get_introduction(self) -> Optional[Introduction]:
        """Get the active introduction, most recent first"""
        response = (
            self.client.table(INTRODUCTION)
            .select("*")
            .eq("is_active", True)
            .order("timestamp", desc=True)
            .limit(1)
            .execute()
        )
        return Introduction(**response.data[0]) if response.data else None

    def replace_introduction(self, data: Dict[str, Any]) -> Introduction:
        """Deactivate every introduction, then insert the new active one"""
        self.client.table(INTRODUCTION).update({"is_active": False}).eq("is_active", True).execute()
        row = self.insert_row(INTRODUCTION, {**data, "is_active": True})
        return Introduction(**row)

    # Prompt examples
    def get_prompt_example_by_id(self, example_id: int) -> Optional[PromptExample]:
        row = self.get_row(PROMPT_EXAMPLES, example_id)
        return PromptExample(**row) if row else None

    def get_active_prompt_examples(self) -> List[PromptExample]:
        rows = self.list_rows(
            PROMPT_EXAMPLES,
            order_by=[("display_order", False), ("timestamp", True)],
            active_only=True,
        )
        return [PromptExample(**row) for row in rows]

    # Contact
    def get_contact(self) -> Optional[Contact]:
        response = self.client.table(CONTACTS).select("*").limit(1).execute()
        return Contact(**response.data[0]) if response.data else None

    def upsert_contact(self, data: Dict[str, Any]) -> Contact:
        """Update the single contact row, creating it on first write"""
        existing = self.get_contact()
        if existing:
            row = self.update_row(CONTACTS, existing.id, data)
        else:
            row = self.insert_row(CONTACTS, data)
        return Contact(**row)

    # Skills
    def get_skill_categories(self) -> List[SkillCategory]:
        rows = self.list_rows(SKILL_CATEGORIES, order_by=[("display_order", False)])
        return [SkillCategory(**row) for row in rows]

    def get_skills(self) -> List[Skill]:
        rows = self.list_rows(SKILLS, order_by=[("category_id", False), ("display_order", False)])
        return [Skill(**row) for row in rows]

    def delete_skill_category(self, category_id: int) -> bool:
        """Delete a category together with its skills"""
        self.client.table(SKILLS).delete().eq("category_id", category_id).execute()
        return self.delete_row(SKILL_CATEGORIES, category_id)

    # Conversations
    def add_conversation(self, turn_data: dict) -> ConversationTurn:
        """Append one question/answer turn"""
        row = self.insert_row(CONVERSATIONS, turn_data)
        return ConversationTurn(**row)

    def get_all_conversations(self) -> List[ConversationTurn]:
        """All turns, newest first"""
        rows = self.list_rows(CONVERSATIONS, order_by=[("timestamp", True)])
        return [ConversationTurn(**row) for row in rows]

    def get_recent_conversations(self, limit: int = 10) -> List[ConversationTurn]:
        """Most recent turns across all sessions, newest first"""
        response = (
            self.client.table(CONVERSATIONS)
            .select("*")
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [ConversationTurn(**row) for row in response.data or []]

    def get_session_conversations(self, session_id: str, limit: int = 10) -> List[ConversationTurn]:
        """Most recent turns of one session, newest first"""
        response = (
            self.client.table(CONVERSATIONS)
            .select("*")
            .eq("session_id", session_id)
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [ConversationTurn(**row) for row in response.data or []]

    # Translation cache
    def get_cached_translation(
        self, original_text: str, language: str, context: Optional[str] = None
    ) -> Optional[Translation]:
        query = (
            self.client.table(TRANSLATIONS)
            .select("*")
            .eq("original_text", original_text)
            .eq("language", language)
        )
        if context:
            query = query.eq("context", context)
        response = query.limit(1).execute()
        return Translation(**response.data[0]) if response.data else None

    def add_translation(self, translation_data: dict) -> Translation:
        row = self.insert_row(TRANSLATIONS, translation_data)
        return Translation(**row)
