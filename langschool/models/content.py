from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


post_categories = Table(
    "post_categories",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Post(Base):
    """Blog post with German and Farsi variants of every text field"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    title_fa = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    content_fa = Column(Text, nullable=False)
    excerpt = Column(Text, default="")
    excerpt_fa = Column(Text, default="")
    author = Column(String(100), default="Admin")
    author_image = Column(String(500), default="")
    thumbnail_url = Column(String(500), default="/images/blog-placeholder.jpg")
    is_published = Column(Boolean, default=False)
    publish_date = Column(DateTime, server_default=func.now())
    admin_id = Column(Integer, ForeignKey("admins.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    categories = relationship("Category", secondary=post_categories, back_populates="posts")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    name_fa = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text)
    description_fa = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    posts = relationship("Post", secondary=post_categories, back_populates="categories")

    @property
    def post_count(self):
        return len(self.posts)


class HeroSlide(Base):
    __tablename__ = "hero_slides"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    title_fa = Column(String(255), nullable=False)
    description = Column(Text)
    description_fa = Column(Text)
    image_url = Column(String(500), nullable=False)
    button_one_text = Column(String(100))
    button_one_fa = Column(String(100))
    button_one_link = Column(String(500))
    button_two_text = Column(String(100))
    button_two_fa = Column(String(100))
    button_two_link = Column(String(500))
    is_active = Column(Boolean, default=True)
    order_index = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)
    admin_id = Column(Integer, ForeignKey("admins.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}


class FeatureItem(Base):
    __tablename__ = "feature_items"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    title_fa = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    description_fa = Column(Text, nullable=False)
    icon_name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True)
    order_index = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)
    admin_id = Column(Integer, ForeignKey("admins.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}


class Statistic(Base):
    __tablename__ = "statistics"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    title_fa = Column(String(255), nullable=False)
    value = Column(String(50), nullable=False)  # display string, e.g. "1500+"
    is_active = Column(Boolean, default=True)
    order_index = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)
    admin_id = Column(Integer, ForeignKey("admins.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}


class Charter(Base):
    __tablename__ = "charters"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    title_fa = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    description_fa = Column(Text, nullable=False)
    icon_name = Column(String(100))
    is_active = Column(Boolean, default=True)
    order_index = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)
    admin_id = Column(Integer, ForeignKey("admins.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}


class GlobalSetting(Base):
    __tablename__ = "global_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, index=True, nullable=False)
    value = Column(Text, nullable=False)
    description = Column(Text)
    updated_by = Column(String(255))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class AboutPage(Base):
    """Editable About page. The newest row is the one shown."""
    __tablename__ = "about_pages"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    title_fa = Column(String(255), nullable=False)
    story_title = Column(String(255), nullable=False)
    story_title_fa = Column(String(255), nullable=False)
    story_content = Column(Text, nullable=False)
    story_content_fa = Column(Text, nullable=False)
    story_image = Column(String(500))
    mission_title = Column(String(255), nullable=False)
    mission_title_fa = Column(String(255), nullable=False)
    mission_content = Column(Text, nullable=False)
    mission_content_fa = Column(Text, nullable=False)
    values_title = Column(String(255), nullable=False)
    values_title_fa = Column(String(255), nullable=False)
    # three value cards
    value1_title = Column(String(255), nullable=False)
    value1_title_fa = Column(String(255), nullable=False)
    value1_content = Column(Text, nullable=False)
    value1_content_fa = Column(Text, nullable=False)
    value2_title = Column(String(255), nullable=False)
    value2_title_fa = Column(String(255), nullable=False)
    value2_content = Column(Text, nullable=False)
    value2_content_fa = Column(Text, nullable=False)
    value3_title = Column(String(255), nullable=False)
    value3_title_fa = Column(String(255), nullable=False)
    value3_content = Column(Text, nullable=False)
    value3_content_fa = Column(Text, nullable=False)
    admin_id = Column(Integer, ForeignKey("admins.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
