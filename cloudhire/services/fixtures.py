# cloudhire/services/fixtures.py
"""
Fixture job listings used by JobServiceClient in fixture mode (no backend
configured) and, when enabled, as the fallback after network failures.
Backends can use this shape as the reference record format.
"""
import copy
from typing import Any, Dict, List

FIXTURE_JOBS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "title": "Senior Full Stack Developer",
        "company": "TechCorp Vietnam",
        "location": "Ho Chi Minh City",
        "type": "Full-time",
        "salary": "30,000,000 - 50,000,000 VND",
        "description": "Build modern web applications with React, Node.js and AWS in an agile team.",
        "requirements": "5+ years of JavaScript/TypeScript\nReact, Next.js, Node.js\nAWS Lambda, API Gateway, DynamoDB",
        "createdAt": "2024-01-15T10:00:00Z",
    },
    {
        "id": "2",
        "title": "AWS Solutions Architect",
        "company": "Cloud Solutions Inc",
        "location": "Ha Noi",
        "type": "Full-time",
        "salary": "40,000,000 - 60,000,000 VND",
        "description": "Design and roll out cloud solutions on AWS together with customers.",
        "requirements": "AWS Certified Solutions Architect\n3+ years with AWS services\nServerless architecture",
        "createdAt": "2024-01-14T14:30:00Z",
    },
    {
        "id": "3",
        "title": "DevOps Engineer",
        "company": "StartupXYZ",
        "location": "Da Nang",
        "type": "Full-time",
        "salary": "25,000,000 - 40,000,000 VND",
        "description": "Own CI/CD pipelines, infrastructure and monitoring.",
        "requirements": "Docker, Kubernetes\nGitHub Actions or Jenkins\nCloudWatch, Prometheus",
        "createdAt": "2024-01-13T09:15:00Z",
    },
    {
        "id": "4",
        "title": "Frontend Developer (React)",
        "company": "Digital Agency Pro",
        "location": "Ho Chi Minh City",
        "type": "Full-time",
        "salary": "20,000,000 - 35,000,000 VND",
        "description": "Client-side projects with a focus on performance and UX.",
        "requirements": "2+ years of React\nRedux or Zustand\nTailwind or Material-UI",
        "createdAt": "2024-01-12T16:45:00Z",
    },
    {
        "id": "5",
        "title": "Backend Developer (Node.js)",
        "company": "E-commerce Platform",
        "location": "Ho Chi Minh City",
        "type": "Full-time",
        "salary": "25,000,000 - 45,000,000 VND",
        "description": "Backend services for a high-traffic e-commerce platform.",
        "requirements": "3+ years of Node.js\nMongoDB or PostgreSQL\nRedis, SQS or RabbitMQ",
        "createdAt": "2024-01-11T11:20:00Z",
    },
    {
        "id": "6",
        "title": "Cloud Security Engineer",
        "company": "Financial Services Co",
        "location": "Ha Noi",
        "type": "Full-time",
        "salary": "35,000,000 - 55,000,000 VND",
        "description": "Secure cloud infrastructure and applications.",
        "requirements": "4+ years of cloud security\nIAM, encryption, network security\nSOC 2, ISO 27001",
        "createdAt": "2024-01-10T08:00:00Z",
    },
    {
        "id": "7",
        "title": "Full Stack Developer (Remote)",
        "company": "Global Tech Company",
        "location": "Remote",
        "type": "Full-time",
        "salary": "$2,000 - $3,500 USD",
        "description": "Remote role in a distributed international team with flexible hours.",
        "requirements": "4+ years full stack\nReact and Node.js\nGood written English",
        "createdAt": "2024-01-09T13:30:00Z",
    },
    {
        "id": "8",
        "title": "Junior Software Engineer",
        "company": "Tech Startup",
        "location": "Ho Chi Minh City",
        "type": "Full-time",
        "salary": "15,000,000 - 25,000,000 VND",
        "description": "For new graduates or engineers with 1-2 years of experience, with mentorship.",
        "requirements": "CS degree or equivalent\nBasic JavaScript, Python or Java\nGitHub portfolio",
        "createdAt": "2024-01-08T10:15:00Z",
    },
    {
        "id": "9",
        "title": "Data Engineer",
        "company": "Big Data Analytics",
        "location": "Ha Noi",
        "type": "Full-time",
        "salary": "30,000,000 - 50,000,000 VND",
        "description": "Data pipelines, ETL and warehouses on large real-time datasets.",
        "requirements": "Python, SQL\nSpark, Airflow, Kafka\nRedshift or BigQuery",
        "createdAt": "2024-01-07T15:00:00Z",
    },
    {
        "id": "10",
        "title": "Mobile Developer (React Native)",
        "company": "Mobile App Studio",
        "location": "Ho Chi Minh City",
        "type": "Full-time",
        "salary": "22,000,000 - 38,000,000 VND",
        "description": "iOS and Android apps with React Native.",
        "requirements": "2+ years of React Native\nNative modules\nPublished apps",
        "createdAt": "2024-01-06T12:00:00Z",
    },
]


def fixture_jobs() -> List[Dict[str, Any]]:
    # callers may mutate their copy
    return copy.deepcopy(FIXTURE_JOBS)
