"""业务层：统计视图、推荐网络、搜索过滤与定时任务。"""
