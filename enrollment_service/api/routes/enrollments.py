# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API endpoints.

Mounted under /api/enrollments. Every response is an ApiResponse
envelope; domain errors are rendered by the handlers in api.errors.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from enrollment_service.api.dependencies import get_enrollment_service
from enrollment_service.api.errors import error_response
from enrollment_service.domains.enrollment import (
    EnrollmentNotActiveError,
    EnrollmentNotFoundError,
    EnrollmentService,
    EnrollmentValidationError,
)
from enrollment_service.models.common import ApiResponse
from enrollment_service.models.enrollment import EnrollmentResponse, EnrollStudentRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_responses(enrollments) -> list[EnrollmentResponse]:
    return [EnrollmentResponse.model_validate(e) for e in enrollments]


@router.get("", response_model=ApiResponse[list[EnrollmentResponse]])
async def list_enrollments(
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[list[EnrollmentResponse]]:
    """List every enrollment, ACTIVE and DROPPED."""
    enrollments = await service.get_all_enrollments()
    return ApiResponse.success(_to_responses(enrollments))


@router.get("/course/{course_id}", response_model=ApiResponse[list[EnrollmentResponse]])
async def list_course_enrollments(
    course_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[list[EnrollmentResponse]]:
    enrollments = await service.get_enrollments_by_course_id(course_id)
    return ApiResponse.success(_to_responses(enrollments))


@router.get("/student/{student_id}", response_model=ApiResponse[list[EnrollmentResponse]])
async def list_student_enrollments(
    student_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[list[EnrollmentResponse]]:
    enrollments = await service.get_enrollments_by_student_id(student_id)
    return ApiResponse.success(_to_responses(enrollments))


@router.post(
    "",
    response_model=ApiResponse[EnrollmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def enroll_student(
    request: EnrollStudentRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[EnrollmentResponse]:
    """Enroll a student in a course identified by its code.

    Raises:
        EnrollmentValidationError: If courseCode or studentId is missing or blank.
    """
    course_code = (request.course_code or "").strip()
    student_id = (request.student_id or "").strip()
    if not course_code or not student_id:
        raise EnrollmentValidationError("courseCode and studentId are required")

    enrollment = await service.enroll_student(course_code, student_id)
    return ApiResponse.success(
        EnrollmentResponse.model_validate(enrollment),
        message="Enrollment successful",
        code=status.HTTP_201_CREATED,
    )


@router.delete("/{enrollment_id}", response_model=ApiResponse[None])
async def unenroll_student(
    enrollment_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[None] | JSONResponse:
    """Drop an ACTIVE enrollment.

    Both an unknown id and an already dropped enrollment answer 404.
    """
    try:
        await service.unenroll_student(enrollment_id)
    except (EnrollmentNotFoundError, EnrollmentNotActiveError) as e:
        return error_response(status.HTTP_404_NOT_FOUND, e.message)

    return ApiResponse.no_content("Unenrollment successful")


@router.get("/count/{course_id}", response_model=ApiResponse[int])
async def count_course_enrollments(
    course_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[int]:
    """Count ACTIVE enrollments from the local store."""
    count = await service.get_course_enrollment_count(course_id)
    return ApiResponse.success(count)


@router.get("/isEnrolled", response_model=ApiResponse[bool])
async def is_student_enrolled(
    course_id: str = Query(..., alias="courseId"),
    student_id: str = Query(..., alias="studentId"),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[bool]:
    enrolled = await service.is_student_enrolled(course_id, student_id)
    return ApiResponse.success(enrolled)
