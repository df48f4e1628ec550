from typing import List, Optional, Tuple
from datetime import datetime, timezone

from ocrstudio.models.ocr_config import OcrConfig
from ocrstudio.models.task_mongo import SchedulerConfig, Task


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def insert_task(task: Task) -> Task:
    """Insert a new task record."""
    task.updated_at = _now()
    await task.insert()
    return task


async def save_task(task: Task) -> Task:
    """Replace the stored task with the given state."""
    task.updated_at = _now()
    await task.save()
    return task


async def delete_task(task: Task) -> None:
    await task.delete()


async def get_task_by_id(task_id: str) -> Optional[Task]:
    """Get task by ID."""
    return await Task.get(task_id)


async def get_all_tasks() -> List[Task]:
    """Get all tasks ordered by id."""
    return await Task.find_all().sort("+_id").to_list()


async def get_tasks_page(page_number: int, page_size: int) -> Tuple[List[Task], int]:
    """Get one page of tasks ordered by id, together with the total count."""
    total = await Task.find_all().count()
    tasks = await Task.find_all().sort("+_id").skip(page_number * page_size).limit(page_size).to_list()
    return tasks, total


async def _set_fields(task_id: str, fields: dict) -> int:
    fields["updated_at"] = _now()
    result = await Task.get_motor_collection().update_one({"_id": task_id}, {"$set": fields})
    return result.matched_count


async def update_ocr_config_by_id(task_id: str, ocr_config: OcrConfig) -> int:
    """Replace only the OCR configuration. Returns the number of matched tasks."""
    return await _set_fields(task_id, {"ocr_config": ocr_config.model_dump(mode="json")})


async def update_scheduler_config_by_id(task_id: str, scheduler_config: SchedulerConfig) -> int:
    """Replace only the scheduler configuration. Returns the number of matched tasks."""
    return await _set_fields(task_id, {"scheduler_config": scheduler_config.model_dump()})


async def update_language_by_id(task_id: str, language: str) -> int:
    """Replace only the OCR language. Returns the number of matched tasks."""
    return await _set_fields(task_id, {"ocr_config.language": language})


async def count_tasks_by_status() -> List[dict]:
    """Number of tasks per lifecycle status."""
    pipeline = [
        {"$group": {"_id": "$ocr_progress.status", "count": {"$sum": 1}}},
        {"$project": {"status": "$_id", "count": 1, "_id": 0}},
        {"$sort": {"status": 1}},
    ]
    return await Task.aggregate(pipeline).to_list()


async def average_in_documents() -> float:
    """Average number of input documents per task, 0.0 when there are no tasks."""
    pipeline = [
        {"$project": {"num_in_documents": {"$size": "$in_documents"}}},
        {"$group": {"_id": None, "average_count": {"$avg": "$num_in_documents"}}},
        {"$project": {"_id": 0, "average_count": 1}},
    ]
    result = await Task.aggregate(pipeline).to_list()
    if not result or result[0].get("average_count") is None:
        return 0.0
    return float(result[0]["average_count"])
