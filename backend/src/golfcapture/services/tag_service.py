"""
Tag Service
Course-scoped customer tags
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from golfcapture.exceptions import ConflictError, NotFoundError
from golfcapture.models.customer import Customer
from golfcapture.models.tag import Tag, customer_tags

logger = logging.getLogger(__name__)


class TagService:
    """Tag CRUD and customer tagging"""

    @staticmethod
    def list_tags(db: Session, course_id: UUID) -> List[Tuple[Tag, int]]:
        """Tags with their customer counts, by name"""
        rows = (
            db.query(Tag, func.count(customer_tags.c.customer_id))
            .outerjoin(customer_tags, customer_tags.c.tag_id == Tag.id)
            .filter(Tag.course_id == course_id)
            .group_by(Tag.id)
            .order_by(Tag.name)
            .all()
        )
        return [(tag, count) for tag, count in rows]

    @staticmethod
    def get_tag(db: Session, course_id: UUID, tag_id: UUID) -> Tag:
        tag = db.query(Tag).filter(Tag.id == tag_id, Tag.course_id == course_id).first()
        if not tag:
            raise NotFoundError("Tag", tag_id)
        return tag

    @staticmethod
    def create_tag(
        db: Session,
        course_id: UUID,
        name: str,
        color: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Tag:
        name = name.strip()
        existing = db.query(Tag.id).filter(Tag.course_id == course_id, Tag.name == name).first()
        if existing is not None:
            raise ConflictError(f"Tag '{name}' already exists", reason="duplicate_tag")

        tag = Tag(course_id=course_id, name=name, description=description)
        if color:
            tag.color = color
        db.add(tag)
        db.commit()
        db.refresh(tag)
        return tag

    @staticmethod
    def attach(
        db: Session, course_id: UUID, customer_id: UUID, tag_id: UUID, created_by: Optional[str] = None
    ) -> bool:
        """
        Tag a customer (idempotent)

        Returns:
            True if the tag was newly attached
        """
        customer = db.query(Customer).filter(Customer.id == customer_id, Customer.course_id == course_id).first()
        if not customer:
            raise NotFoundError("Customer", customer_id)
        TagService.get_tag(db, course_id, tag_id)

        exists = (
            db.query(customer_tags)
            .filter(customer_tags.c.customer_id == customer_id, customer_tags.c.tag_id == tag_id)
            .first()
        )
        if exists is not None:
            return False

        db.execute(customer_tags.insert().values(customer_id=customer_id, tag_id=tag_id, created_by=created_by))
        db.commit()
        logger.info(f"Tagged customer {customer_id} with {tag_id}")
        return True

    @staticmethod
    def detach(db: Session, course_id: UUID, customer_id: UUID, tag_id: UUID) -> None:
        TagService.get_tag(db, course_id, tag_id)
        db.execute(
            customer_tags.delete().where(
                customer_tags.c.customer_id == customer_id,
                customer_tags.c.tag_id == tag_id,
            )
        )
        db.commit()
