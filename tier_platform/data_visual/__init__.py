from tier_platform.base_model import PostStat


class AbstractPostProcessor:
    def get_post_stat(self, scheduler) -> PostStat:
        raise NotImplementedError()
