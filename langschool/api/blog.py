import logging
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import Post, Category
from ..schemas.content import (
    PostCreate, PostUpdate, PostResponse,
    CategoryCreate, CategoryUpdate, CategoryResponse
)
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blog", tags=["blog"])

POST_DEFAULTS = {
    "excerpt": "",
    "excerpt_fa": "",
    "author": "Admin",
    "author_image": "",
    "thumbnail_url": "/images/blog-placeholder.jpg",
}


def get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def get_category_or_404(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


def ensure_unique_slug(db: Session, model, slug: str, current_id: Optional[int] = None):
    clash = db.query(model).filter(model.slug == slug).first()
    if clash and clash.id != current_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slug already exists")


def load_categories(db: Session, category_ids: List[int]) -> List[Category]:
    categories = db.query(Category).filter(Category.id.in_(category_ids)).all() if category_ids else []
    if len(categories) != len(set(category_ids)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return categories


# Posts endpoints
@router.get("/posts")
def get_posts(id: Optional[int] = None, published: Optional[bool] = None, db: Session = Depends(get_db)):
    if id is not None:
        return PostResponse.model_validate(get_post_or_404(db, id))

    query = db.query(Post)
    if published is not None:
        query = query.filter(Post.is_published == published)
    posts = query.order_by(Post.publish_date.desc(), Post.id.desc()).all()
    return [PostResponse.model_validate(p) for p in posts]


@router.post("/posts", status_code=status.HTTP_201_CREATED)
def create_post(payload: PostCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    ensure_unique_slug(db, Post, payload.slug)

    data = payload.model_dump(exclude={"category_ids"})
    for field, default in POST_DEFAULTS.items():
        if not data.get(field):
            data[field] = default

    db_post = Post(**data, admin_id=auth.profile_id)
    db_post.categories = load_categories(db, payload.category_ids)
    db.add(db_post)
    db.commit()
    db.refresh(db_post)
    logger.info("Post %s (%s) created", db_post.id, db_post.slug)
    return PostResponse.model_validate(db_post)


def _apply_post_update(db: Session, db_post: Post, data: dict):
    if "slug" in data and data["slug"] and data["slug"] != db_post.slug:
        ensure_unique_slug(db, Post, data["slug"], current_id=db_post.id)
    category_ids = data.pop("category_ids", None)
    if category_ids is not None:
        db_post.categories = load_categories(db, category_ids)
    for field, value in data.items():
        if value is not None:
            setattr(db_post, field, value)


@router.put("/posts")
def update_post(
    id: int,
    payload: PostCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    """Replace a post; optional fields left empty keep their stored value"""
    db_post = get_post_or_404(db, id)
    _apply_post_update(db, db_post, payload.model_dump())
    db.commit()
    db.refresh(db_post)
    return PostResponse.model_validate(db_post)


@router.patch("/posts")
def patch_post(
    id: int,
    payload: PostUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    """Partial update, e.g. toggling is_published"""
    db_post = get_post_or_404(db, id)
    _apply_post_update(db, db_post, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(db_post)
    return PostResponse.model_validate(db_post)


@router.delete("/posts")
def delete_post(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_post = get_post_or_404(db, id)
    db.delete(db_post)
    db.commit()
    return {"success": True}


@router.get("/published")
def get_published_posts(db: Session = Depends(get_db)):
    posts = db.query(Post).filter(Post.is_published.is_(True)).order_by(Post.publish_date.desc(), Post.id.desc()).all()
    return [PostResponse.model_validate(p) for p in posts]


@router.get("/published/{slug}")
def get_published_post(slug: str, db: Session = Depends(get_db)):
    post = db.query(Post).filter(Post.slug == slug, Post.is_published.is_(True)).first()
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return PostResponse.model_validate(post)


# Categories endpoints
@router.get("/categories")
def get_categories(id: Optional[int] = None, db: Session = Depends(get_db)):
    if id is not None:
        return CategoryResponse.model_validate(get_category_or_404(db, id))
    categories = db.query(Category).order_by(Category.name.asc()).all()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/categories/published")
def get_published_categories(db: Session = Depends(get_db)):
    """Categories with at least one published post"""
    categories = (
        db.query(Category)
        .filter(Category.posts.any(Post.is_published.is_(True)))
        .order_by(Category.name.asc())
        .all()
    )
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("/categories", status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    ensure_unique_slug(db, Category, payload.slug)
    db_category = Category(**payload.model_dump())
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return CategoryResponse.model_validate(db_category)


@router.put("/categories")
def update_category(
    id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_category = get_category_or_404(db, id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("slug") and data["slug"] != db_category.slug:
        ensure_unique_slug(db, Category, data["slug"], current_id=db_category.id)
    update_fields(db_category, data)
    db.commit()
    db.refresh(db_category)
    return CategoryResponse.model_validate(db_category)


@router.delete("/categories")
def delete_category(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Delete a category; its posts stay, minus the tag"""
    db_category = get_category_or_404(db, id)
    db.delete(db_category)
    db.commit()
    return {"success": True}
