from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


# Ordering
class MoveRequest(BaseModel):
    direction: str  # "up" or "down"
    version: Optional[int] = None


class ReorderItem(BaseModel):
    id: int
    order_index: int


class ReorderRequest(BaseModel):
    items: List[ReorderItem]


# Blog schemas
class CategoryBase(BaseModel):
    name: str
    name_fa: str
    slug: str
    description: Optional[str] = None
    description_fa: Optional[str] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    name_fa: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    description_fa: Optional[str] = None


class CategoryBrief(BaseModel):
    id: int
    name: str
    name_fa: str
    slug: str

    class Config:
        from_attributes = True


class CategoryResponse(CategoryBase):
    id: int
    post_count: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PostBase(BaseModel):
    title: str
    title_fa: str
    slug: str
    content: str
    content_fa: str
    excerpt: Optional[str] = None
    excerpt_fa: Optional[str] = None
    author: Optional[str] = None
    author_image: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_published: bool = False


class PostCreate(PostBase):
    category_ids: List[int] = []


class PostUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    content_fa: Optional[str] = None
    excerpt: Optional[str] = None
    excerpt_fa: Optional[str] = None
    author: Optional[str] = None
    author_image: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_published: Optional[bool] = None
    category_ids: Optional[List[int]] = None


class PostResponse(PostBase):
    id: int
    publish_date: Optional[datetime] = None
    admin_id: Optional[int] = None
    categories: List[CategoryBrief] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Hero slide schemas
class HeroSlideBase(BaseModel):
    title: str
    title_fa: str
    description: Optional[str] = None
    description_fa: Optional[str] = None
    image_url: str
    button_one_text: Optional[str] = None
    button_one_fa: Optional[str] = None
    button_one_link: Optional[str] = None
    button_two_text: Optional[str] = None
    button_two_fa: Optional[str] = None
    button_two_link: Optional[str] = None
    is_active: bool = True


class HeroSlideCreate(HeroSlideBase):
    pass


class HeroSlideUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    description: Optional[str] = None
    description_fa: Optional[str] = None
    image_url: Optional[str] = None
    button_one_text: Optional[str] = None
    button_one_fa: Optional[str] = None
    button_one_link: Optional[str] = None
    button_two_text: Optional[str] = None
    button_two_fa: Optional[str] = None
    button_two_link: Optional[str] = None
    is_active: Optional[bool] = None


class HeroSlideResponse(HeroSlideBase):
    id: int
    order_index: int
    version: int
    admin_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Feature item schemas
class FeatureItemBase(BaseModel):
    title: str
    title_fa: str
    description: str
    description_fa: str
    icon_name: str
    is_active: bool = True


class FeatureItemCreate(FeatureItemBase):
    pass


class FeatureItemUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    description: Optional[str] = None
    description_fa: Optional[str] = None
    icon_name: Optional[str] = None
    is_active: Optional[bool] = None


class FeatureItemResponse(FeatureItemBase):
    id: int
    order_index: int
    version: int
    admin_id: Optional[int] = None

    class Config:
        from_attributes = True


# Statistic schemas
class StatisticBase(BaseModel):
    title: str
    title_fa: str
    value: str
    is_active: bool = True


class StatisticCreate(StatisticBase):
    pass


class StatisticUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    value: Optional[str] = None
    is_active: Optional[bool] = None


class StatisticResponse(StatisticBase):
    id: int
    order_index: int
    version: int
    admin_id: Optional[int] = None

    class Config:
        from_attributes = True


# Charter schemas
class CharterBase(BaseModel):
    title: str
    title_fa: str
    description: str
    description_fa: str
    icon_name: Optional[str] = None
    is_active: bool = True


class CharterCreate(CharterBase):
    pass


class CharterUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    description: Optional[str] = None
    description_fa: Optional[str] = None
    icon_name: Optional[str] = None
    is_active: Optional[bool] = None


class CharterResponse(CharterBase):
    id: int
    order_index: int
    version: int
    admin_id: Optional[int] = None

    class Config:
        from_attributes = True


# Global settings
class SettingUpdate(BaseModel):
    key: Optional[str] = None
    value: Optional[str] = None
    description: Optional[str] = None


# About page
class AboutPageBase(BaseModel):
    title: str
    title_fa: str
    story_title: str
    story_title_fa: str
    story_content: str
    story_content_fa: str
    story_image: Optional[str] = None
    mission_title: str
    mission_title_fa: str
    mission_content: str
    mission_content_fa: str
    values_title: str
    values_title_fa: str
    value1_title: str
    value1_title_fa: str
    value1_content: str
    value1_content_fa: str
    value2_title: str
    value2_title_fa: str
    value2_content: str
    value2_content_fa: str
    value3_title: str
    value3_title_fa: str
    value3_content: str
    value3_content_fa: str


class AboutPageUpdate(AboutPageBase):
    pass


class AboutPageResponse(AboutPageBase):
    id: int
    admin_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
