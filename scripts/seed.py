#!/usr/bin/env python
"""
Seed the document store with reference data for development.

Writes use fixed document ids, so running a scenario twice leaves the
data unchanged.
"""

import argparse
import asyncio
import os
import sys
from typing import Any

from prompt_universe.core.constants import (
    COLLECTION_DEMANDS,
    COLLECTION_EXPERT_DOMAINS,
    COLLECTION_LLM_CONNECTIONS,
    COLLECTION_PROCUREMENT_ITEMS,
    COLLECTION_PROMPTS,
    COLLECTION_TENANTS,
    COLLECTION_USERS,
    DEFAULT_CONNECTION_PRIORITY,
)
from prompt_universe.core.documents import SERVER_TIMESTAMP, DocumentStore
from prompt_universe.core.documents.factory import create_document_store
from prompt_universe.core.logging import configure_logging


EXPERT_DOMAINS = {
    "recruitment-expert": "招聘专家",
    "marketing-expert": "营销专家",
    "code-expert": "代码专家",
    "copywriting-expert": "文案专家",
}

PROMPTS: list[dict[str, Any]] = [
    {
        "id": "rec-001",
        "name": "简历亮点总结",
        "description": "总结候选人的关键技能、工作经验和与目标职位的匹配度。",
        "expertId": "recruitment-expert",
        "userPrompt": (
            "你是一位资深的HR专家。请根据以下简历内容，总结该候选人的核心亮点，包括：\n"
            "1. 主要技能\n2. 关键工作经历\n3. 与{{job_title}}的匹配度分析。\n\n"
            "简历：\n{{resume_text}}"
        ),
    },
    {
        "id": "mkt-001",
        "name": "社交媒体帖子生成",
        "description": "根据产品信息和目标受众生成推广文案。",
        "expertId": "marketing-expert",
        "userPrompt": (
            "为我们的新产品“{{product_name}}”撰写一篇社交媒体推广帖子。\n"
            "产品特点：{{product_features}}\n目标平台：{{platform}}"
        ),
    },
    {
        "id": "code-001",
        "name": "代码解释器",
        "description": "用自然语言解释一段代码的功能和逻辑。",
        "expertId": "code-expert",
        "systemPrompt": "你是一名资深软件架构师。",
        "userPrompt": (
            "请用清晰、易懂的语言解释以下代码的功能和实现逻辑。\n\n"
            "代码语言：{{language}}\n\n```\n{{code_snippet}}\n```"
        ),
    },
    {
        "id": "cpy-001",
        "name": "通用文案润色",
        "description": "从语法、流畅度、吸引力等角度优化一段初稿。",
        "expertId": "copywriting-expert",
        "userPrompt": "请将以下文案进行润色，使其更具吸引力和专业性：\n\n{{draft_text}}",
        "negativePrompt": "营销套话",
    },
]

PROCUREMENT_ITEMS: dict[str, dict[str, Any]] = {
    "private-deployment": {
        "title": "私有化部署",
        "description": "在企业自有环境中部署提示词平台。",
        "icon": "server",
        "tag": "企业",
        "price": 50000,
        "unit": "次",
        "category": "服务",
    },
    "prompt-consulting": {
        "title": "提示词定制咨询",
        "description": "由提示词工程师为业务场景定制提示词。",
        "icon": "sparkles",
        "tag": "热门",
        "price": 2000,
        "unit": "人天",
        "category": "服务",
    },
    "token-pack": {
        "title": "模型调用额度包",
        "description": "一百万 token 的通用模型调用额度。",
        "icon": "coins",
        "tag": "",
        "price": 300,
        "unit": "包",
        "category": "资源",
    },
}


async def seed_default(store: DocumentStore, api_key: str | None) -> None:
    """Create expert domains, library prompts, the catalog and a general model."""
    batch = store.batch()
    for domain_id, name in EXPERT_DOMAINS.items():
        batch.set(COLLECTION_EXPERT_DOMAINS, domain_id, {"name": name}, merge=True)
    for item_id, item in PROCUREMENT_ITEMS.items():
        batch.set(COLLECTION_PROCUREMENT_ITEMS, item_id, item, merge=True)
    for prompt in PROMPTS:
        prompt_id = prompt["id"]
        fields = {key: value for key, value in prompt.items() if key != "id"}
        batch.set(
            COLLECTION_PROMPTS,
            prompt_id,
            {
                **fields,
                "scope": "通用",
                "archived": False,
                "updatedAt": SERVER_TIMESTAMP,
            },
            merge=True,
        )

    if api_key:
        batch.set(
            COLLECTION_LLM_CONNECTIONS,
            "default-google",
            {
                "modelName": "gemini-1.5-flash",
                "provider": "google",
                "apiKey": api_key,
                "scope": "通用",
                "status": "活跃",
                "priority": DEFAULT_CONNECTION_PRIORITY,
            },
            merge=True,
        )
    else:
        print("No API key given; skipping the default model connection.")

    await batch.commit()
    print(
        f"Seeded {len(EXPERT_DOMAINS)} expert domains, {len(PROMPTS)} prompts "
        f"and {len(PROCUREMENT_ITEMS)} catalog items."
    )


async def seed_demo(store: DocumentStore) -> None:
    """Create demo tenants with members and an open demand."""
    batch = store.batch()
    tenants = [
        ("acme", "Acme Corporation", "admin@acme.com", "活跃"),
        ("globex", "Globex Industries", "admin@globex.com", "待审核"),
    ]
    for tenant_id, company, email, status in tenants:
        batch.set(
            COLLECTION_TENANTS,
            tenant_id,
            {
                "companyName": company,
                "adminEmail": email,
                "status": status,
                "createdAt": SERVER_TIMESTAMP,
            },
            merge=True,
        )
        batch.set(
            COLLECTION_USERS,
            f"{tenant_id}-admin",
            {
                "name": f"{company} Admin",
                "email": email,
                "role": "租户管理员",
                "status": "活跃",
                "tenantId": tenant_id,
            },
            merge=True,
        )

    batch.set(
        COLLECTION_DEMANDS,
        "demo-contract-review",
        {
            "title": "合同审查提示词",
            "category": "法律",
            "description": "需要一个识别采购合同风险条款的提示词。",
            "budget": "¥2,000",
            "tags": ["合同", "风险"],
            "tenantId": "acme",
            "status": "征集中",
            "createdAt": SERVER_TIMESTAMP,
        },
        merge=True,
    )
    await batch.commit()
    print(f"Seeded {len(tenants)} demo tenants.")


async def main(scenario: str, api_key: str | None) -> None:
    """Run the seeding based on scenario."""
    configure_logging()
    store = create_document_store()
    try:
        if scenario == "default":
            await seed_default(store, api_key)
        elif scenario == "demo":
            await seed_default(store, api_key)
            await seed_demo(store)
        else:
            print(f"Unknown scenario: {scenario}")
            print("Available scenarios: default, demo")
            sys.exit(1)
    finally:
        await store.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the document store")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, demo)",
    )
    parser.add_argument(
        "--api-key",
        default=os.environ.get("SEED_GOOGLE_API_KEY"),
        help="API key for the default Google connection (env: SEED_GOOGLE_API_KEY)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario, args.api_key))
