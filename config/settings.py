"""全局配置管理

所有用户可配置项均通过 .env 文件或环境变量设置，运行时自动加载到此处。
存储默认使用进程内的 SQLite 内存数据库，进程结束即释放。
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用配置 - 所有字段均可通过 .env 或环境变量覆盖"""

    # ========== 存储 ==========
    # sqlite:// 为内存数据库，每个 StudioStore 实例独立
    database_url: str = "sqlite://"

    # ========== 统计视图 ==========
    upcoming_bookings_limit: int = 3
    recent_galleries_limit: int = 3
    top_referrers_limit: int = 5

    # 每位被推荐客户的固定奖励金额（与 ReferralProgram 配置无关）
    referral_reward_unit: float = 50.0

    # ========== 提醒调度 ==========
    reminder_check_minutes: int = 15

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# 全局配置实例
settings = Settings()
